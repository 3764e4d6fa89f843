from datetime import timedelta

# Ordinal scale used by check-ins (wifi, noise, busyness)
ORDINAL_MIN = 1
ORDINAL_MAX = 5

# Reliability model
DAMPENING_FACTOR = 0.6  # Inferred data never outweighs live check-ins
CHECKIN_SATURATION_K = 4  # n / (n + k): 20 check-ins -> 0.83, 36 -> 0.90
CATEGORY_SATURATION_K = 1  # Venue votes: 1 -> 0.5, 3 -> 0.75
REVIEW_SATURATION_K = 40  # Provider review counts saturate more slowly
COVERAGE_FLOOR = 0.5  # Weight kept by a factor reported in few check-ins
MAX_VARIANCE = 2500.0  # Largest variance of values on a 0-100 scale
MAX_VARIANCE_PENALTY = 0.5
MAX_RATING_SPREAD = 1.5  # Provider rating stdev (1-5 scale) that zeroes consensus

# Live share of a factor that also has review inference: min(n_live / 10, 0.9)
LIVE_BLEND_DIVISOR = 10
LIVE_BLEND_CAP = 0.9
LIVE_DOMINANCE_THRESHOLD = 0.5  # At or below this live share the factor is tagged blended

# Inferred boolean signals mapped to sub-scores
INFERRED_POSITIVE_SCORE = 80.0
INFERRED_NEGATIVE_SCORE = 20.0

# Provider weighting for the external rating (Google 50%, Yelp 30%, Foursquare 20%)
PROVIDER_WEIGHTS = {
    "google": 0.5,
    "yelp": 0.3,
    "foursquare": 0.2,
}

# Staleness
STALENESS_THRESHOLD = timedelta(days=14)

# Momentum
MOMENTUM_WINDOW = timedelta(days=7)
MOMENTUM_MIN_CHECKINS = 3  # Required in BOTH windows
MOMENTUM_CHANGE_SCALE = 0.5  # Relative change mapped to one standard deviation
MOMENTUM_STEADY_BAND = 0.10  # |change| below this is "steady"

# Weather deltas applied to busyness (0-100 occupancy points)
WEATHER_CONDITION_DELTAS = {
    "sunny": -4.0,
    "cloudy": 0.0,
    "rainy": 12.0,
    "stormy": 18.0,
    "snowy": 15.0,
    "cold": 6.0,
    "hot": 5.0,
}
WEATHER_PRECIPITATION_PER_MM = 4.0
WEATHER_PRECIPITATION_CAP = 15.0
MAX_WEATHER_DELTA = 25.0

# Crowd forecast
FORECAST_HORIZON_HOURS = 6
CROWD_LOW_MAX = 34.0  # busyness <= this is "low"
CROWD_HIGH_MIN = 67.0  # busyness >= this is "high"

# Crowd level from mean check-in busyness on the 1-5 scale
CROWD_LEVEL_LOW_MAX = 2.1
CROWD_LEVEL_HIGH_MIN = 3.8

# Dominance analysis
BALANCED_DOMINANCE_RATIO = 1.2

# Score tiers
SCORE_TIER_GREAT = 78
SCORE_TIER_GOOD = 62

# Insights (1-5 check-in scale unless noted)
FAST_WIFI_MIN = 4.0
LAPTOP_SESSION_WIFI_MIN = 3.8
LAPTOP_FRIENDLY_PCT_MIN = 70.0
LAPTOP_SESSION_PCT_MIN = 60.0
NOT_CROWDED_MAX = 2.2
QUIET_NOISE_MAX = 2.4
STRONG_REVIEWS_MIN_COUNT = 100
COFFEE_MEETUP_RATING_MIN = 4.2
MAX_HIGHLIGHTS = 4
MAX_USE_CASES = 3
