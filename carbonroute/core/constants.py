from carbonroute.models.scenario import (
    EnergySource,
    LoadFactor,
    ModeType,
    TollOption,
    TrafficLevel,
    TransportMode,
    WeatherCondition,
)

# Base consumption per kilometer (liters, kWh per passenger-km for high-speed rail)
CONSUMPTION_RATES = {
    TransportMode.CAR: 0.069,             # Toyota Avanza
    TransportMode.BUS: 0.091,             # Toyota HiAce minibus
    TransportMode.MOTORCYCLE: 0.02,       # Honda Vario
    TransportMode.INTERCITY_RAIL: 0.05,   # KA Argo Parahyangan, per passenger
    TransportMode.HIGH_SPEED_RAIL: 0.036, # KCIC Whoosh, kWh per passenger-km
}

# kg CO2 per liter or kWh
EMISSION_FACTORS = {
    EnergySource.FOSSIL_FUEL: 2.6,          # diesel/gasoline
    EnergySource.GRID_ELECTRICITY: 0.85,    # PLN grid
    EnergySource.BIOFUEL: 0.5,              # biofuel LCA
    EnergySource.RENEWABLE_ELECTRICITY: 0.0,
}

MODE_TYPES = {
    TransportMode.CAR: ModeType.ROAD,
    TransportMode.BUS: ModeType.ROAD,
    TransportMode.MOTORCYCLE: ModeType.ROAD,
    TransportMode.INTERCITY_RAIL: ModeType.RAIL,
    TransportMode.HIGH_SPEED_RAIL: ModeType.RAIL,
}

# Fixed order used whenever every mode is computed
MODE_ORDER = [
    TransportMode.CAR,
    TransportMode.BUS,
    TransportMode.MOTORCYCLE,
    TransportMode.INTERCITY_RAIL,
    TransportMode.HIGH_SPEED_RAIL,
]

# Published Bandung-Jakarta rail distances (km)
STATIC_DISTANCES = {
    TransportMode.INTERCITY_RAIL: 150.0,
    TransportMode.HIGH_SPEED_RAIL: 142.0,
}

# Scenario multipliers
TRAFFIC_FACTORS = {
    TrafficLevel.HEAVY: 1.1,
    TrafficLevel.VERY_HEAVY: 1.2,
}

WEATHER_FACTORS = {
    WeatherCondition.LIGHT_RAIN: 1.05,
    WeatherCondition.HEAVY_RAIN: 1.1,
}

LOAD_FACTORS = {
    LoadFactor.PEAK: 1.15,
}

# Live weather multipliers
LIGHT_RAIN_KEYWORDS = ("light rain", "hujan ringan")
HEAVY_RAIN_KEYWORDS = ("heavy rain", "hujan lebat", "rain", "hujan")
LIGHT_RAIN_FACTOR = 1.05
HEAVY_RAIN_FACTOR = 1.1
EXTREME_TEMPERATURE_FACTOR = 1.03
MIN_COMFORT_TEMPERATURE_C = 15.0
MAX_COMFORT_TEMPERATURE_C = 35.0
STRONG_WIND_FACTOR = 1.02
STRONG_WIND_KMH = 15.0

# Route metadata multipliers
TRAFFIC_WARNING_KEYWORDS = ("traffic", "congestion")
TRAFFIC_WARNING_FACTOR = 1.1
URBAN_SPEED_KMH = 30.0
URBAN_FACTOR = 1.15
HIGHWAY_SPEED_KMH = 80.0
HIGHWAY_FACTOR = 0.95

# BMKG adm4 region codes
REGION_CODES = {
    # DKI Jakarta
    "jakarta-pusat": "31.71",
    "jakarta-utara": "31.72",
    "jakarta-barat": "31.73",
    "jakarta-selatan": "31.74",
    "jakarta-timur": "31.75",
    "kepulauan-seribu": "31.01",
    # Jawa Barat
    "bandung": "32.73",
    "bandung-barat": "32.17",
    "cimahi": "32.77",
    "purwakarta": "32.14",
    "karawang": "32.15",
    "bekasi": "32.75",
    "bekasi-kabupaten": "32.16",
    "bogor": "32.71",
    "depok": "32.76",
    "sukabumi": "32.72",
    "tasikmalaya": "32.78",
    "cirebon": "32.74",
    "banjar": "32.79",
}

REGION_NAMES = {
    "31.71": "Jakarta Pusat",
    "31.72": "Jakarta Utara",
    "31.73": "Jakarta Barat",
    "31.74": "Jakarta Selatan",
    "31.75": "Jakarta Timur",
    "32.73": "Bandung",
    "32.77": "Cimahi",
    "32.71": "Bogor",
    "32.76": "Depok",
}

ROUTES = {
    "bandung-jakarta": {
        "label": "Bandung - Jakarta",
        "origin": "Bandung, West Java, Indonesia",
        "destination": "Jakarta, Indonesia",
        "origin_region": REGION_CODES["bandung"],
        "regions": [REGION_CODES["bandung"], REGION_CODES["purwakarta"], REGION_CODES["jakarta-pusat"]],
    },
    "jakarta-bandung": {
        "label": "Jakarta - Bandung",
        "origin": "Jakarta, Indonesia",
        "destination": "Bandung, West Java, Indonesia",
        "origin_region": REGION_CODES["jakarta-pusat"],
        "regions": [REGION_CODES["jakarta-pusat"], REGION_CODES["purwakarta"], REGION_CODES["bandung"]],
    },
}

# Display labels for tables and reports
MODE_LABELS = {
    TransportMode.CAR: "Car (Toyota Avanza)",
    TransportMode.BUS: "Bus/Minibus",
    TransportMode.MOTORCYCLE: "Motorcycle",
    TransportMode.INTERCITY_RAIL: "KA Argo Parahyangan",
    TransportMode.HIGH_SPEED_RAIL: "KCIC Whoosh",
}

TRAFFIC_LABELS = {
    TrafficLevel.NORMAL: "Normal",
    TrafficLevel.HEAVY: "Heavy",
    TrafficLevel.VERY_HEAVY: "Very heavy",
}

WEATHER_LABELS = {
    WeatherCondition.NORMAL: "Normal",
    WeatherCondition.LIGHT_RAIN: "Light rain",
    WeatherCondition.HEAVY_RAIN: "Heavy rain",
}

LOAD_FACTOR_LABELS = {
    LoadFactor.STANDARD: "Standard",
    LoadFactor.PEAK: "Peak hour",
}

ENERGY_LABELS = {
    EnergySource.FOSSIL_FUEL: "Fossil fuel",
    EnergySource.GRID_ELECTRICITY: "PLN grid electricity",
    EnergySource.BIOFUEL: "Biofuel",
    EnergySource.RENEWABLE_ELECTRICITY: "Renewable electricity",
}

TOLL_LABELS = {
    TollOption.WITH_TOLLS: "Via toll roads",
    TollOption.AVOID_TOLLS: "Avoid toll roads",
}
