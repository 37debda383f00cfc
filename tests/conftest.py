import pytest

KOI_HEADER = ["kepid", "koi_period", "koi_depth", "koi_disposition", "flagged"]
DISPOSITIONS = ["CONFIRMED", "CANDIDATE", "FALSE POSITIVE"]


def koi_rows(n):
    return [
        [
            str(10000000 + i),
            f"{1.5 + i:.3f}",
            str(100 + 10 * i),
            DISPOSITIONS[i % 3],
            "true" if i % 2 else "false",
        ]
        for i in range(n)
    ]


def make_csv(header, rows):
    return "\n".join([",".join(header)] + [",".join(r) for r in rows]) + "\n"


@pytest.fixture
def koi_csv():
    return make_csv(KOI_HEADER, koi_rows(10))


KOI_FEATURE_VALUES = {
    "koi_period": 10.00506974,
    "koi_time0bk": 136.83029,
    "koi_impact": 0.148,
    "koi_duration": 3.481,
    "koi_depth": 143.3,
    "koi_incl": 89.61,
    "koi_model_snr": 11.4,
    "koi_count": 2,
    "koi_bin_oedp_sig": 0.4606,
    "koi_steff": 5912,
    "koi_slogg": 4.453,
    "koi_srad": 0.924,
    "koi_smass": 0.884,
    "koi_kepmag": 14.634,
}


@pytest.fixture
def koi_features():
    return dict(KOI_FEATURE_VALUES)


@pytest.fixture
def preloaded_response():
    keys = ["first", "second", "third", "fourth", "fifth",
            "sixth", "seventh", "eighth", "ninth", "tenth"]
    data = {"candidate_probability": 0.6128, "non_candidate_probability": 0.3872}
    for i, key in enumerate(keys):
        data[key] = {
            "kepid": str(10000001 + i),
            "candidate_probability": 0.8,
            "non_candidate_probability": 0.2,
        }
    return data


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, text=None):
        self.status_code = status_code
        self._json = json_data
        if text is None:
            import json
            text = json.dumps(json_data) if json_data is not None else ""
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json


@pytest.fixture
def fake_response():
    return FakeResponse
