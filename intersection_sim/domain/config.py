# Simulation Configuration

# World Settings
WORLD_WIDTH = 800.0
WORLD_HEIGHT = 600.0
ROAD_HALF_WIDTH = 60.0   # Half width of each road, also half size of the intersection box
LANE_WIDTH = 30.0
SPAWN_MARGIN = 20.0      # Vehicles appear this far outside the visible edge
EXIT_MARGIN = 50.0       # Vehicles are removed this far outside the visible edge

# Clock
FRAME_DT = 0.05          # Longest frame the kernel integrates in one pass (20Hz)
MACRO_TICK = 1.0         # Seconds between signal/statistics updates

# Signal Timings
BASELINE_GREEN_TIME = 20.0
YELLOW_TIME = 3.0
ALL_RED_TIME = 3.0       # Clearance before the opposing axis turns green
OPTIMIZATION_INTERVAL = 2  # Macro ticks between retunes of the running green

ADAPTIVE_MIN_GREEN = 10.0
ADAPTIVE_MAX_GREEN = 30.0
ADAPTIVE_SHORTEN_RATIO = 0.7
ADAPTIVE_EXTEND_RATIO = 1.5
ADAPTIVE_SHORTEN_STEP = 2.0
ADAPTIVE_EXTEND_STEP = 3.0

PREDICTIVE_MIN_GREEN = 12.0
PREDICTIVE_MAX_GREEN = 35.0
PREDICTIVE_SHORTEN_RATIO = 0.6
PREDICTIVE_EXTEND_RATIO = 1.5
PREDICTIVE_SHORTEN_STEP = 3.0
PREDICTIVE_EXTEND_STEP = 5.0
PREDICTIVE_WAITING_WEIGHT = 1.2
PREDICTIVE_MOVING_WEIGHT = 0.5

# Vehicle Physics
MAX_VEHICLES = 80
MIN_SPEED = 40.0         # units/s
MAX_SPEED = 60.0
CAR_SHARE = 0.8          # Remainder split evenly between trucks and buses
VEHICLE_LENGTHS = {"car": 15.0, "truck": 25.0, "bus": 30.0}

# Traffic Rules
APPROACH_ZONE = 50.0     # Distance before the intersection edge where a red light stops traffic
FOLLOWING_FACTOR = 2.0   # Minimum gap to the vehicle ahead, in own vehicle lengths

# Statistics
WAIT_SAMPLE_WINDOW = 100
WAIT_NOISE_THRESHOLD = 0.5  # Stops shorter than this are not counted as waits
THROUGHPUT_WINDOW = 60.0
