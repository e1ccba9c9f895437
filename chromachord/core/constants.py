"""Global constants for chromachord."""

# Pitch names
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Audio processing defaults
DEFAULT_SR = 22050
DEFAULT_N_FFT = 8192

# Chromagram defaults
DEFAULT_NUM_OCTAVES = 2
DEFAULT_NUM_HARMONICS = 2
DEFAULT_BIN_RADIUS = 2  # bins, scaled per harmonic
DEFAULT_REF_FREQ = 130.81279  # C3 in Hz

# A diatonic scale has seven distinct pitch classes
SCALE_SIZE = 7
