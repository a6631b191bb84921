"""
Defines the database schema for cramdeck using a SQL string constant.
"""

DB_SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS kv_store (
        key VARCHAR PRIMARY KEY,
        value VARCHAR,
        updated_at TIMESTAMP WITH TIME ZONE NOT NULL
    );
"""
