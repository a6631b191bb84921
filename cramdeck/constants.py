"""
Cram scheduler constants.

Time units, scheduling defaults and bounds, display sentinels and storage keys.
No runtime configuration or path defaults - pure constants only.
"""

# Time units in milliseconds
SECOND_MS: int = 1000
MINUTE_MS: int = 60 * SECOND_MS
HOUR_MS: int = 60 * MINUTE_MS
DAY_MS: int = 24 * HOUR_MS

# Scheduling state defaults and bounds
DEFAULT_EASE: float = 2.3
MIN_EASE: float = 1.3
MAX_EASE: float = 2.7

# No single jump may exceed the cram window.
MAX_INTERVAL_MS: int = 10 * DAY_MS

# Display
CLOZE_PLACEHOLDER: str = "____"
NO_BACK_SENTINEL: str = "(no back)"

# Persisted key-value layout. "v2" is the only serialization format tag.
DECK_FORMAT_TAG: str = "v2"
INPUT_KEY: str = "cramdeck_input"
DECK_KEY: str = f"cramdeck_deck_{DECK_FORMAT_TAG}"

DEFAULT_DECK: str = """Acid + Base | Salt + Water
Strong acid (e.g. HCl) | Fully dissociates into H+ in solution
Weak acid (e.g. CH3COOH) | {{c1::Partially dissociates}} in solution
pH of neutral solution | {{c1::7 at 25°C}}
Le Chatelier's principle | If a system is {{c1::disturbed}}, it will shift to oppose the change
Oxidation | {{c1::Loss of electrons}} (OIL RIG)
Reduction | {{c1::Gain of electrons}} (OIL RIG)
Titration | Find concentration using a {{c1::standard solution}}
Equilibrium constant (Kc) | Depends only on {{c1::temperature}}"""
