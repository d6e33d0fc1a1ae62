"""Constants for data generation."""

# Chunking
DEFAULT_CHUNK_ROWS = 1_000

# Foreign keys
DEFAULT_NULL_PROBABILITY = 0.2

# Leaf providers
DEFAULT_PROVIDER = "faker"

# Pattern engine
DEFAULT_REGEX_REPEAT_LIMIT = 10  # Extra repetitions drawn for *, + and wide {m,n}
DEFAULT_MAX_PLACEHOLDER_LENGTH = None  # No cap on N in {{random:N}} / {{number:N}}

# Heuristic field defaults
RECENT_DAYS = 30
STATUS_VALUES = ["active", "inactive", "pending", "completed"]
QUANTITY_RANGE = (1, 100)
PRICE_RANGE = (1.0, 1000.0)

# Company size bands: (weight, min employees, max employees)
EMPLOYEE_COUNT_BANDS = [
    (0.50, 1, 50),
    (0.30, 51, 500),
    (0.15, 501, 5_000),
    (0.05, 5_001, 50_000),
]

INDUSTRIES = [
    "Technology",
    "Manufacturing",
    "Retail",
    "Healthcare",
    "Finance",
    "Education",
    "Consulting",
    "Real Estate",
    "Transportation",
    "Hospitality",
]
