"""
Request / response shapes for the prediction proxy.

Requests are validated before anything is forwarded; responses
are validated before they are handed back to the browser.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    TypeAdapter,
    field_validator,
    model_validator,
)

from exchron.standards.koi_features import UPLOAD_TARGET_KEYS

# JSON numbers only; "1.5" strings and booleans are rejected
Number = Annotated[float, Field(strict=True)]
KeplerId = Union[StrictInt, StrictStr]


# ------------------------------------------------------------------
# Requests
# ------------------------------------------------------------------

class KOIFeatures(BaseModel):
    model_config = ConfigDict(extra="allow")

    koi_period: Number
    koi_time0bk: Number
    koi_impact: Number
    koi_duration: Number
    koi_depth: Number
    koi_incl: Number
    koi_model_snr: Number
    koi_count: Number
    koi_bin_oedp_sig: Number
    koi_steff: Number
    koi_slogg: Number
    koi_srad: Number
    koi_smass: Number
    koi_kepmag: Number


class _TabularRequest(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    model: Literal["gb", "svm"]
    # Any truthy value; the handler rejects falsy ones
    predict: Any


class ManualPredictionRequest(_TabularRequest):
    datasource: Literal["manual"]
    features: KOIFeatures


class UploadPredictionRequest(_TabularRequest):
    datasource: Literal["upload"]
    features_target_1: Optional[KOIFeatures] = Field(default=None, alias="features-target-1")
    features_target_2: Optional[KOIFeatures] = Field(default=None, alias="features-target-2")
    features_target_3: Optional[KOIFeatures] = Field(default=None, alias="features-target-3")

    @model_validator(mode="after")
    def _require_one_target(self):
        if not self.targets():
            raise ValueError(
                "At least one features-target-X object is required for upload datasource"
            )
        return self

    def targets(self):
        candidates = (self.features_target_1, self.features_target_2, self.features_target_3)
        return {
            key: value
            for key, value in zip(UPLOAD_TARGET_KEYS, candidates)
            if value is not None
        }


class PreloadedPredictionRequest(_TabularRequest):
    datasource: Literal["pre-loaded"]
    data: Literal["kepler", "tess"]


MLPredictionRequest = Annotated[
    Union[ManualPredictionRequest, UploadPredictionRequest, PreloadedPredictionRequest],
    Field(discriminator="datasource"),
]
ml_request_adapter = TypeAdapter(MLPredictionRequest)


class DLPredictionRequest(BaseModel):
    model: str
    kepid: KeplerId

    @field_validator("model")
    @classmethod
    def _normalize_model(cls, value: str) -> str:
        model = value.strip().lower()
        if model not in ("cnn", "dnn"):
            raise ValueError('Invalid model type. Must be "cnn" or "dnn"')
        return model

    @field_validator("kepid")
    @classmethod
    def _non_empty_kepid(cls, value):
        if isinstance(value, str) and not value.strip():
            raise ValueError("kepid must not be empty")
        return value.strip() if isinstance(value, str) else value

    def upstream_payload(self) -> dict:
        return {"model": self.model, "kepid": self.kepid, "predict": True}


# ------------------------------------------------------------------
# Responses
# ------------------------------------------------------------------

class ProbabilityResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    candidate_probability: Number
    non_candidate_probability: Number


class TargetResult(ProbabilityResult):
    kepid: KeplerId

    @field_validator("kepid")
    @classmethod
    def _non_empty_kepid(cls, value):
        if isinstance(value, str) and not value.strip():
            raise ValueError("kepid must not be empty")
        return value


class PreloadedPredictionResponse(ProbabilityResult):
    first: TargetResult
    second: TargetResult
    third: TargetResult
    fourth: TargetResult
    fifth: TargetResult
    sixth: TargetResult
    seventh: TargetResult
    eighth: TargetResult
    ninth: TargetResult
    tenth: TargetResult


class LightCurvePredictionResponse(TargetResult):
    pass


RESPONSE_MODELS = {
    "manual": ProbabilityResult,
    "upload": ProbabilityResult,
    "pre-loaded": PreloadedPredictionResponse,
}
