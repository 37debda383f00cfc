"""
Kepler Object of Interest (KOI) feature schema used by the
tabular (gb / svm) prediction models.
"""

from typing import Dict, List

KOI_FEATURES: List[Dict] = [
    {"key": "koi_period", "label": "Orbital Period", "unit": "days", "min": 0.242, "max": 129995.778, "default": 10.0, "step": 0.1, "description": "Time for planet to complete one orbit"},
    {"key": "koi_time0bk", "label": "Transit Epoch (BKJD)", "unit": "BKJD", "min": 120.516, "max": 1472.522, "default": 170.0, "step": 0.001, "description": "Time of first observed transit in Barycentric Kepler Julian Day"},
    {"key": "koi_impact", "label": "Impact Parameter", "unit": "", "min": 0.0, "max": 100.806, "default": 0.5, "step": 0.01, "description": "How centrally the planet transits the star"},
    {"key": "koi_duration", "label": "Transit Duration", "unit": "hours", "min": 0.052, "max": 138.54, "default": 3.0, "step": 0.01, "description": "Duration of the transit event"},
    {"key": "koi_depth", "label": "Transit Depth", "unit": "ppm", "min": 0.0, "max": 1541400.0, "default": 100.0, "step": 1.0, "description": "Depth of the transit in parts per million"},
    {"key": "koi_incl", "label": "Inclination", "unit": "degrees", "min": 2.29, "max": 90.0, "default": 89.0, "step": 0.1, "description": "Orbital inclination angle"},
    {"key": "koi_model_snr", "label": "Signal-to-Noise Ratio", "unit": "", "min": 0.0, "max": 9054.7, "default": 50.0, "step": 0.1, "description": "Transit signal-to-noise ratio"},
    {"key": "koi_count", "label": "Transit Count", "unit": "", "min": 1, "max": 500, "default": 50, "step": 1, "description": "Number of observed transits"},
    {"key": "koi_bin_oedp_sig", "label": "Odd-Even Depth Significance", "unit": "", "min": -10.0, "max": 10.0, "default": 0.0, "step": 0.001, "description": "Statistical significance of odd-even depth difference"},
    {"key": "koi_steff", "label": "Stellar Temperature", "unit": "K", "min": 2661, "max": 15896, "default": 5778, "step": 1, "description": "Effective temperature of the host star"},
    {"key": "koi_slogg", "label": "Stellar Surface Gravity", "unit": "log10(cm/s²)", "min": 0.047, "max": 5.364, "default": 4.44, "step": 0.01, "description": "Logarithm of stellar surface gravity"},
    {"key": "koi_srad", "label": "Stellar Radius", "unit": "R☉", "min": 0.109, "max": 229.908, "default": 1.0, "step": 0.01, "description": "Radius of the host star in solar radii"},
    {"key": "koi_smass", "label": "Stellar Mass", "unit": "M☉", "min": 0.0, "max": 3.735, "default": 1.0, "step": 0.01, "description": "Mass of the host star in solar masses"},
    {"key": "koi_kepmag", "label": "Kepler Magnitude", "unit": "mag", "min": 6.966, "max": 20.003, "default": 12.0, "step": 0.01, "description": "Apparent magnitude in Kepler bandpass"},
]

REQUIRED_KOI_FEATURES: List[str] = [f["key"] for f in KOI_FEATURES]

# Upload payloads carry at most this many feature-target objects
MAX_UPLOAD_TARGETS = 3
UPLOAD_TARGET_KEYS: List[str] = [f"features-target-{i}" for i in range(1, MAX_UPLOAD_TARGETS + 1)]


class Datasource:
    MANUAL = "manual"
    UPLOAD = "upload"
    PRELOADED = "pre-loaded"

    @classmethod
    def is_valid(cls, datasource: str) -> bool:
        return isinstance(datasource, str) and datasource in {cls.MANUAL, cls.UPLOAD, cls.PRELOADED}


TABULAR_MODELS = ("gb", "svm")
LIGHT_CURVE_MODELS = ("cnn", "dnn")
PRELOADED_DATASETS = ("kepler", "tess")

# Keys of the ten individual results returned for a pre-loaded run
PRELOADED_RESULT_KEYS = (
    "first", "second", "third", "fourth", "fifth",
    "sixth", "seventh", "eighth", "ninth", "tenth",
)