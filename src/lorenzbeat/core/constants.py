"""Project-wide defaults for the Lorenz sonification pipeline."""

LORENZ_SIGMA = 10.0
LORENZ_RHO = 28.0
LORENZ_BETA = 8.0 / 3.0

INITIAL_STATE = (1.0, 1.0, 1.0)

DEFAULT_STEPS = 1536
DEFAULT_DT = 0.01
DEFAULT_CPS = 0.9

# Midpoint substituted for degenerate or non-finite normalized samples
NEUTRAL = 0.5

DEFAULT_PRESET = "classic"
DEFAULT_ENGINE = "strudel"

FALLBACK_VOICE = "sine"
LEAD_VOICES = ("tri", "pluck", "sine")
PAD_VOICES = ("saw", "pulse", "tri", "sine")

REST = "~"
PERCUSSION_SYMBOLS = ("bd", "sd", "hh", REST)
