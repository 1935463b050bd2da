"""
Health Wrapped Engine — Configuration
Paths, constants, and lookup tables for the year-in-review summary.
"""
from pathlib import Path

# ── Base paths ──────────────────────────────────────────────────
BASE_DIR = Path.cwd()
EXPORT_XML = BASE_DIR / "export.xml"
SUMMARY_JSON = BASE_DIR / "summary.json"

# ── Run settings ────────────────────────────────────────────────
TARGET_YEAR = "2025"
PROGRESS_EVERY = 100_000     # Print a progress line every N elements

# ── HealthKit identifiers ──────────────────────────────────────
STEP_TYPE = "HKQuantityTypeIdentifierStepCount"
DISTANCE_TYPE = "HKQuantityTypeIdentifierDistanceWalkingRunning"
ACTIVE_ENERGY_TYPE = "HKQuantityTypeIdentifierActiveEnergyBurned"
HEART_RATE_TYPE = "HKQuantityTypeIdentifierHeartRate"
RESTING_HEART_RATE_TYPE = "HKQuantityTypeIdentifierRestingHeartRate"
VO2_MAX_TYPE = "HKQuantityTypeIdentifierVO2Max"
FLIGHTS_CLIMBED_TYPE = "HKQuantityTypeIdentifierFlightsClimbed"
SLEEP_TYPE = "HKCategoryTypeIdentifierSleepAnalysis"

# Vendor prefixes removed for display only; matching always uses full ids
TYPE_PREFIXES = (
    "HKQuantityTypeIdentifier",
    "HKCategoryTypeIdentifier",
    "HKWorkoutActivityType",
)

# Output metric name → record type for the per-type stats block
STAT_TYPES = {
    "heartRate": HEART_RATE_TYPE,
    "steps": STEP_TYPE,
    "activeEnergy": ACTIVE_ENERGY_TYPE,
    "distance": DISTANCE_TYPE,
    "sleep": SLEEP_TYPE,
    "restingHeartRate": RESTING_HEART_RATE_TYPE,
    "vo2Max": VO2_MAX_TYPE,
    "flightsClimbed": FLIGHTS_CLIMBED_TYPE,
}

# ── Activity thresholds ────────────────────────────────────────
ACTIVE_DAY_STEP_THRESHOLD = 3000   # A day with more steps than this is active
TOP_N = 5                          # Leaderboard length
DAYS_IN_YEAR = 365
MINUTES_PER_YEAR = 525_600
DAILY_STEP_GOAL = 10_000

# Total annual distance (km) → comparison, ascending
DISTANCE_COMPARISONS = [
    (0, "A lap around the neighbourhood"),
    (42.195, "A full marathon"),
    (100, "London to Brighton"),
    (500, "Paris to Amsterdam"),
    (1500, "Singapore to Manila"),
    (4000, "New York to Los Angeles"),
    (10000, "London to Tokyo"),
    (40075, "Around the Earth"),
]

# Average daily steps → activity tier, ascending
ACTIVITY_LEVELS = [
    (0, "SEDENTARY"),
    (5000, "LIGHTLY ACTIVE"),
    (7500, "MODERATE"),
    (10000, "ACTIVE"),
    (12500, "HIGHLY ACTIVE"),
]

# Most frequent workout type → (personality, tagline)
PERSONALITY_LABELS = {
    "HKWorkoutActivityTypeRunning": ("CARDIO KING", "Running is your thing."),
    "HKWorkoutActivityTypeWalking": ("WANDERER", "Every step counts, and you took them all."),
    "HKWorkoutActivityTypeCycling": ("ROAD WARRIOR", "Two wheels, no limits."),
    "HKWorkoutActivityTypeSwimming": ("WATER BABY", "Happiest in the pool."),
    "HKWorkoutActivityTypeHiking": ("TRAIL BLAZER", "The outdoors is your gym."),
    "HKWorkoutActivityTypeYoga": ("ZEN MASTER", "Balance in body and mind."),
    "HKWorkoutActivityTypeTraditionalStrengthTraining": ("IRON PUMPER", "You lift things up and put them down."),
    "HKWorkoutActivityTypeFunctionalStrengthTraining": ("IRON PUMPER", "You lift things up and put them down."),
    "HKWorkoutActivityTypeHighIntensityIntervalTraining": ("HIIT HERO", "Short, sharp and relentless."),
    "HKWorkoutActivityTypeDance": ("DANCE MACHINE", "You move to your own beat."),
}
DEFAULT_PERSONALITY = ("ALL-ROUNDER", "A little bit of everything.")

# ── Time patterns ──────────────────────────────────────────────
# Fixed iteration order; the first key wins ties for the peak weekday
WEEKDAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
MORNING_HOURS = (5, 12)      # [start, end)
NIGHT_HOURS = (20, 5)        # [20, 24) or [0, 5)

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
