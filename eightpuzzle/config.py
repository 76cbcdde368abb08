# Defaults shared by the session and the command-line scripts.
DEFAULT_HEURISTIC = "manhattan"
DEFAULT_MAX_EXPAND = 0  # 0 = unbounded

SHUFFLE_STEPS_MIN = 0
SHUFFLE_STEPS_MAX = 200
DEFAULT_SHUFFLE_STEPS = 30
