"""Request inputs and typed results for the Tuteliq safety endpoints."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Self

from tuteliq.infrastructure.http import UsageSnapshot
from tuteliq.infrastructure.jsonvalue import (
    JsonValue,
    get_bool,
    get_float,
    get_int,
    get_int_dict,
    get_object,
    get_object_list,
    get_optional_float,
    get_optional_int,
    get_str,
    get_str_list,
)

JsonObject = dict[str, JsonValue]


class _ApiEnum(str, Enum):
    """Enum whose values are the lowercase strings the API uses."""

    @classmethod
    def _default(cls) -> Self:
        return next(iter(cls))

    @classmethod
    def parse(cls, value: str | None) -> Self:
        """Parse an API string, falling back to the type's default member."""
        if value is not None:
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return cls._default()


class Severity(_ApiEnum):
    """Severity level for detected issues."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class GroomingRisk(_ApiEnum):
    """Risk level for grooming detection."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RiskLevel(_ApiEnum):
    """Overall risk level for content analysis."""

    SAFE = "safe"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def from_score(cls, score: float) -> "RiskLevel":
        """Bucket a 0-1 risk score."""
        if score >= 0.9:
            return cls.CRITICAL
        if score >= 0.7:
            return cls.HIGH
        if score >= 0.5:
            return cls.MEDIUM
        if score >= 0.3:
            return cls.LOW
        return cls.SAFE


class EmotionTrend(_ApiEnum):
    """Emotion trend direction."""

    IMPROVING = "improving"
    STABLE = "stable"
    WORSENING = "worsening"

    @classmethod
    def _default(cls) -> "EmotionTrend":
        return cls.STABLE


class Audience(_ApiEnum):
    """Target audience for action plans."""

    CHILD = "child"
    PARENT = "parent"
    EDUCATOR = "educator"
    PLATFORM = "platform"


class MessageRole(_ApiEnum):
    """Role of a message sender in grooming detection."""

    ADULT = "adult"
    CHILD = "child"
    UNKNOWN = "unknown"


class Detection(_ApiEnum):
    """Detection endpoints available to multi-endpoint analysis."""

    BULLYING = "bullying"
    GROOMING = "grooming"
    UNSAFE = "unsafe"
    SOCIAL_ENGINEERING = "social-engineering"
    APP_FRAUD = "app-fraud"
    ROMANCE_SCAM = "romance-scam"
    MULE_RECRUITMENT = "mule-recruitment"
    GAMBLING_HARM = "gambling-harm"
    COERCIVE_CONTROL = "coercive-control"
    VULNERABILITY_EXPLOITATION = "vulnerability-exploitation"
    RADICALISATION = "radicalisation"


# Ordered from most to least urgent.
RECOMMENDED_ACTION_PRIORITY = (
    "immediate_intervention",
    "flag_for_moderator",
    "monitor",
)


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass
class AnalysisContext:
    """Optional context sent alongside analysed content."""

    language: str | None = None
    age_group: str | None = None
    relationship: str | None = None
    platform: str | None = None


@dataclass
class GroomingMessage:
    role: MessageRole
    content: str


@dataclass
class ReportMessage:
    sender: str
    content: str


@dataclass
class DetectGroomingInput:
    messages: list[GroomingMessage]
    child_age: int | None = None
    context: AnalysisContext | None = None
    external_id: str | None = None
    customer_id: str | None = None
    metadata: JsonObject | None = None


@dataclass
class GetActionPlanInput:
    situation: str
    child_age: int | None = None
    audience: Audience | None = None
    severity: Severity | None = None
    external_id: str | None = None
    customer_id: str | None = None
    metadata: JsonObject | None = None


@dataclass
class GenerateReportInput:
    messages: list[ReportMessage]
    child_age: int | None = None
    incident_type: str | None = None
    external_id: str | None = None
    customer_id: str | None = None
    metadata: JsonObject | None = None


@dataclass
class DetectionInput:
    """Input shared by the fraud and harm detection endpoints."""

    content: str
    context: AnalysisContext | None = None
    include_evidence: bool = False
    external_id: str | None = None
    customer_id: str | None = None
    metadata: JsonObject | None = None


@dataclass
class AnalyseMultiInput:
    content: str
    detections: list[Detection] = field(default_factory=list)
    context: AnalysisContext | None = None
    include_evidence: bool = False
    external_id: str | None = None
    customer_id: str | None = None
    metadata: JsonObject | None = None


@dataclass
class RecordConsentInput:
    consent_type: str
    version: str


@dataclass
class RectifyDataInput:
    """Corrected field values for one stored document."""

    collection: str
    document_id: str
    fields: JsonObject


@dataclass
class LogBreachInput:
    title: str
    description: str
    severity: str
    affected_user_ids: list[str]
    data_categories: list[str]
    reported_by: str


@dataclass
class UpdateBreachInput:
    status: str
    notification_status: str | None = None
    notes: str | None = None


@dataclass
class CreateWebhookInput:
    url: str
    events: list[str]
    active: bool = True


@dataclass
class UpdateWebhookInput:
    """Webhook changes. Fields left as None are not sent."""

    url: str | None = None
    events: list[str] | None = None
    active: bool | None = None


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(kw_only=True)
class ResponseMeta:
    """Per-call response metadata shared by every endpoint result.

    Attributes:
        usage: Usage snapshot carried by this call's response.
        request_id: Request id of this call's response.
    """

    usage: UsageSnapshot | None = field(default=None, compare=False)
    request_id: str | None = field(default=None, compare=False)


@dataclass(kw_only=True)
class ApiResult(ResponseMeta):
    """Fields common to analysis results.

    Attributes:
        credits_used: Credits charged for the call, if reported.
        external_id: Caller-supplied correlation id, echoed back.
        customer_id: Caller-supplied customer id, echoed back.
        metadata: Caller-supplied metadata, echoed back.
    """

    credits_used: int | None = None
    external_id: str = ""
    customer_id: str = ""
    metadata: JsonObject | None = None

    @staticmethod
    def common_fields(data: JsonObject) -> dict[str, Any]:
        return {
            "credits_used": get_optional_int(data, "credits_used"),
            "external_id": get_str(data, "external_id"),
            "customer_id": get_str(data, "customer_id"),
            "metadata": get_object(data, "metadata"),
        }


@dataclass(kw_only=True)
class BullyingResult(ApiResult):
    is_bullying: bool = False
    severity: Severity = Severity.LOW
    bullying_type: list[str] = field(default_factory=list)
    confidence: float = 0.0
    rationale: str = ""
    risk_score: float = 0.0
    recommended_action: str = ""
    language: str = ""
    language_status: str = ""

    @classmethod
    def from_json(cls, data: JsonObject) -> "BullyingResult":
        return cls(
            is_bullying=get_bool(data, "is_bullying"),
            severity=Severity.parse(get_str(data, "severity")),
            bullying_type=get_str_list(data, "bullying_type"),
            confidence=get_float(data, "confidence"),
            rationale=get_str(data, "rationale"),
            risk_score=get_float(data, "risk_score"),
            recommended_action=get_str(data, "recommended_action"),
            language=get_str(data, "language"),
            language_status=get_str(data, "language_status"),
            **cls.common_fields(data),
        )


@dataclass(kw_only=True)
class GroomingResult(ApiResult):
    grooming_risk: GroomingRisk = GroomingRisk.NONE
    flags: list[str] = field(default_factory=list)
    confidence: float = 0.0
    rationale: str = ""
    risk_score: float = 0.0
    recommended_action: str = ""
    language: str = ""
    language_status: str = ""

    @classmethod
    def from_json(cls, data: JsonObject) -> "GroomingResult":
        return cls(
            grooming_risk=GroomingRisk.parse(get_str(data, "grooming_risk")),
            flags=get_str_list(data, "flags"),
            confidence=get_float(data, "confidence"),
            rationale=get_str(data, "rationale"),
            risk_score=get_float(data, "risk_score"),
            recommended_action=get_str(data, "recommended_action"),
            language=get_str(data, "language"),
            language_status=get_str(data, "language_status"),
            **cls.common_fields(data),
        )


@dataclass(kw_only=True)
class UnsafeResult(ApiResult):
    unsafe: bool = False
    categories: list[str] = field(default_factory=list)
    severity: Severity = Severity.LOW
    confidence: float = 0.0
    rationale: str = ""
    risk_score: float = 0.0
    recommended_action: str = ""
    language: str = ""
    language_status: str = ""

    @classmethod
    def from_json(cls, data: JsonObject) -> "UnsafeResult":
        return cls(
            unsafe=get_bool(data, "unsafe"),
            categories=get_str_list(data, "categories"),
            severity=Severity.parse(get_str(data, "severity")),
            confidence=get_float(data, "confidence"),
            rationale=get_str(data, "rationale"),
            risk_score=get_float(data, "risk_score"),
            recommended_action=get_str(data, "recommended_action"),
            language=get_str(data, "language"),
            language_status=get_str(data, "language_status"),
            **cls.common_fields(data),
        )


@dataclass(kw_only=True)
class AnalyzeResult(ApiResult):
    """Combined result of the bullying and unsafe checks."""

    risk_level: RiskLevel = RiskLevel.SAFE
    risk_score: float = 0.0
    summary: str = ""
    bullying: BullyingResult | None = None
    unsafe: UnsafeResult | None = None
    recommended_action: str = "none"


@dataclass(kw_only=True)
class EmotionsResult(ApiResult):
    dominant_emotions: list[str] = field(default_factory=list)
    trend: EmotionTrend = EmotionTrend.STABLE
    intensity: float = 0.0
    concerning_patterns: list[str] = field(default_factory=list)
    recommended_followup: str = ""

    @classmethod
    def from_json(cls, data: JsonObject) -> "EmotionsResult":
        return cls(
            dominant_emotions=get_str_list(data, "dominant_emotions"),
            trend=EmotionTrend.parse(get_str(data, "trend")),
            intensity=get_float(data, "intensity"),
            concerning_patterns=get_str_list(data, "concerning_patterns"),
            recommended_followup=get_str(data, "recommended_followup"),
            **cls.common_fields(data),
        )


@dataclass(kw_only=True)
class ActionPlanResult(ApiResult):
    steps: list[str] = field(default_factory=list)
    tone: str = ""
    resources: list[str] = field(default_factory=list)
    urgency: str = ""

    @classmethod
    def from_json(cls, data: JsonObject) -> "ActionPlanResult":
        return cls(
            steps=get_str_list(data, "steps"),
            tone=get_str(data, "tone"),
            resources=get_str_list(data, "resources"),
            urgency=get_str(data, "urgency"),
            **cls.common_fields(data),
        )


@dataclass(kw_only=True)
class ReportResult(ApiResult):
    summary: str = ""
    risk_level: RiskLevel = RiskLevel.SAFE
    timeline: list[str] = field(default_factory=list)
    key_evidence: list[str] = field(default_factory=list)
    recommended_next_steps: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: JsonObject) -> "ReportResult":
        return cls(
            summary=get_str(data, "summary"),
            risk_level=RiskLevel.parse(get_str(data, "risk_level")),
            timeline=get_str_list(data, "timeline"),
            key_evidence=get_str_list(data, "key_evidence"),
            recommended_next_steps=get_str_list(data, "recommended_next_steps"),
            **cls.common_fields(data),
        )


@dataclass
class DetectionCategory:
    tag: str = ""
    label: str = ""
    confidence: float = 0.0

    @classmethod
    def from_json(cls, data: JsonObject) -> "DetectionCategory":
        return cls(
            tag=get_str(data, "tag"),
            label=get_str(data, "label"),
            confidence=get_float(data, "confidence"),
        )


@dataclass
class DetectionEvidence:
    text: str = ""
    tactic: str = ""
    weight: float = 0.0

    @classmethod
    def from_json(cls, data: JsonObject) -> "DetectionEvidence":
        return cls(
            text=get_str(data, "text"),
            tactic=get_str(data, "tactic"),
            weight=get_float(data, "weight"),
        )


@dataclass
class AgeCalibration:
    applied: bool = False
    age_group: str = ""
    multiplier: float | None = None

    @classmethod
    def from_json(cls, data: JsonObject) -> "AgeCalibration":
        return cls(
            applied=get_bool(data, "applied"),
            age_group=get_str(data, "age_group"),
            multiplier=get_optional_float(data, "multiplier"),
        )


@dataclass(kw_only=True)
class DetectionResult(ApiResult):
    """Result of one fraud or harm detection endpoint."""

    endpoint: str = ""
    detected: bool = False
    severity: float = 0.0
    confidence: float = 0.0
    risk_score: float = 0.0
    level: str = ""
    categories: list[DetectionCategory] = field(default_factory=list)
    evidence: list[DetectionEvidence] = field(default_factory=list)
    age_calibration: AgeCalibration | None = None
    recommended_action: str = ""
    rationale: str = ""
    language: str = ""
    language_status: str = ""
    processing_time_ms: float | None = None

    @classmethod
    def from_json(cls, data: JsonObject) -> "DetectionResult":
        age_calibration = get_object(data, "age_calibration")
        return cls(
            endpoint=get_str(data, "endpoint"),
            detected=get_bool(data, "detected"),
            severity=get_float(data, "severity"),
            confidence=get_float(data, "confidence"),
            risk_score=get_float(data, "risk_score"),
            level=get_str(data, "level"),
            categories=[
                DetectionCategory.from_json(item)
                for item in get_object_list(data, "categories")
            ],
            evidence=[
                DetectionEvidence.from_json(item)
                for item in get_object_list(data, "evidence")
            ],
            age_calibration=(
                AgeCalibration.from_json(age_calibration)
                if age_calibration is not None
                else None
            ),
            recommended_action=get_str(data, "recommended_action"),
            rationale=get_str(data, "rationale"),
            language=get_str(data, "language"),
            language_status=get_str(data, "language_status"),
            processing_time_ms=get_optional_float(data, "processing_time_ms"),
            **cls.common_fields(data),
        )


@dataclass
class AnalyseMultiSummary:
    total_endpoints: int = 0
    detected_count: int = 0
    highest_risk: JsonObject | None = None
    overall_risk_level: str = ""

    @classmethod
    def from_json(cls, data: JsonObject) -> "AnalyseMultiSummary":
        return cls(
            total_endpoints=get_int(data, "total_endpoints"),
            detected_count=get_int(data, "detected_count"),
            highest_risk=get_object(data, "highest_risk"),
            overall_risk_level=get_str(data, "overall_risk_level"),
        )


@dataclass(kw_only=True)
class AnalyseMultiResult(ApiResult):
    results: list[DetectionResult] = field(default_factory=list)
    summary: AnalyseMultiSummary | None = None
    cross_endpoint_modifier: float | None = None

    @classmethod
    def from_json(cls, data: JsonObject) -> "AnalyseMultiResult":
        summary = get_object(data, "summary")
        return cls(
            results=[
                DetectionResult.from_json(item)
                for item in get_object_list(data, "results")
            ],
            summary=(
                AnalyseMultiSummary.from_json(summary) if summary is not None else None
            ),
            cross_endpoint_modifier=get_optional_float(data, "cross_endpoint_modifier"),
            **cls.common_fields(data),
        )



# ---------------------------------------------------------------------------
# Account, compliance and usage
# ---------------------------------------------------------------------------


@dataclass(kw_only=True)
class AccountDeletionResult(ResponseMeta):
    message: str = ""
    deleted_count: int = 0

    @classmethod
    def from_json(cls, data: JsonObject) -> "AccountDeletionResult":
        return cls(
            message=get_str(data, "message"),
            deleted_count=get_int(data, "deleted_count"),
        )


@dataclass(kw_only=True)
class AccountExportResult(ResponseMeta):
    user_id: str = ""
    exported_at: str = ""
    data: JsonObject = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: JsonObject) -> "AccountExportResult":
        return cls(
            user_id=get_str(data, "userId"),
            exported_at=get_str(data, "exportedAt"),
            data=get_object(data, "data") or {},
        )


@dataclass
class ConsentRecord:
    id: str = ""
    user_id: str = ""
    consent_type: str = ""
    status: str = ""
    version: str = ""
    created_at: str = ""

    @classmethod
    def from_json(cls, data: JsonObject) -> "ConsentRecord":
        return cls(
            id=get_str(data, "id"),
            user_id=get_str(data, "user_id"),
            consent_type=get_str(data, "consent_type"),
            status=get_str(data, "status"),
            version=get_str(data, "version"),
            created_at=get_str(data, "created_at"),
        )


@dataclass(kw_only=True)
class ConsentActionResult(ResponseMeta):
    """Outcome of recording or withdrawing a consent."""

    message: str = ""
    consent: ConsentRecord | None = None

    @classmethod
    def from_json(cls, data: JsonObject) -> "ConsentActionResult":
        consent = get_object(data, "consent")
        return cls(
            message=get_str(data, "message"),
            consent=ConsentRecord.from_json(consent) if consent is not None else None,
        )


@dataclass(kw_only=True)
class ConsentStatusResult(ResponseMeta):
    consents: list[ConsentRecord] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: JsonObject) -> "ConsentStatusResult":
        return cls(
            consents=[
                ConsentRecord.from_json(item)
                for item in get_object_list(data, "consents")
            ]
        )


@dataclass(kw_only=True)
class RectifyDataResult(ResponseMeta):
    message: str = ""
    updated_fields: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: JsonObject) -> "RectifyDataResult":
        return cls(
            message=get_str(data, "message"),
            updated_fields=get_str_list(data, "updated_fields"),
        )


@dataclass
class AuditLogEntry:
    id: str = ""
    user_id: str = ""
    action: str = ""
    created_at: str = ""
    details: JsonObject | None = None

    @classmethod
    def from_json(cls, data: JsonObject) -> "AuditLogEntry":
        return cls(
            id=get_str(data, "id"),
            user_id=get_str(data, "user_id"),
            action=get_str(data, "action"),
            created_at=get_str(data, "created_at"),
            details=get_object(data, "details"),
        )


@dataclass(kw_only=True)
class AuditLogsResult(ResponseMeta):
    audit_logs: list[AuditLogEntry] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: JsonObject) -> "AuditLogsResult":
        return cls(
            audit_logs=[
                AuditLogEntry.from_json(item)
                for item in get_object_list(data, "audit_logs")
            ]
        )


@dataclass
class BreachRecord:
    """A logged data breach and its notification state."""

    id: str = ""
    title: str = ""
    description: str = ""
    severity: str = ""
    status: str = ""
    notification_status: str = ""
    affected_user_ids: list[str] = field(default_factory=list)
    data_categories: list[str] = field(default_factory=list)
    reported_by: str = ""
    notification_deadline: str = ""
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_json(cls, data: JsonObject) -> "BreachRecord":
        return cls(
            id=get_str(data, "id"),
            title=get_str(data, "title"),
            description=get_str(data, "description"),
            severity=get_str(data, "severity"),
            status=get_str(data, "status"),
            notification_status=get_str(data, "notification_status"),
            affected_user_ids=get_str_list(data, "affected_user_ids"),
            data_categories=get_str_list(data, "data_categories"),
            reported_by=get_str(data, "reported_by"),
            notification_deadline=get_str(data, "notification_deadline"),
            created_at=get_str(data, "created_at"),
            updated_at=get_str(data, "updated_at"),
        )


@dataclass(kw_only=True)
class BreachResult(ResponseMeta):
    """A single breach record; ``message`` is set when one was just logged."""

    message: str = ""
    breach: BreachRecord = field(default_factory=BreachRecord)

    @classmethod
    def from_json(cls, data: JsonObject) -> "BreachResult":
        return cls(
            message=get_str(data, "message"),
            breach=BreachRecord.from_json(get_object(data, "breach") or {}),
        )


@dataclass(kw_only=True)
class BreachListResult(ResponseMeta):
    breaches: list[BreachRecord] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: JsonObject) -> "BreachListResult":
        return cls(
            breaches=[
                BreachRecord.from_json(item)
                for item in get_object_list(data, "breaches")
            ]
        )


@dataclass
class WebhookInfo:
    id: str = ""
    url: str = ""
    events: list[str] = field(default_factory=list)
    active: bool = False
    secret: str = ""
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_json(cls, data: JsonObject) -> "WebhookInfo":
        return cls(
            id=get_str(data, "id"),
            url=get_str(data, "url"),
            events=get_str_list(data, "events"),
            active=get_bool(data, "active"),
            secret=get_str(data, "secret"),
            created_at=get_str(data, "created_at"),
            updated_at=get_str(data, "updated_at"),
        )


@dataclass(kw_only=True)
class WebhookListResult(ResponseMeta):
    webhooks: list[WebhookInfo] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: JsonObject) -> "WebhookListResult":
        return cls(
            webhooks=[
                WebhookInfo.from_json(item)
                for item in get_object_list(data, "webhooks")
            ]
        )


@dataclass(kw_only=True)
class WebhookResult(ResponseMeta):
    """A created or updated webhook."""

    message: str = ""
    webhook: WebhookInfo | None = None

    @classmethod
    def from_json(cls, data: JsonObject) -> "WebhookResult":
        webhook = get_object(data, "webhook")
        return cls(
            message=get_str(data, "message"),
            webhook=WebhookInfo.from_json(webhook) if webhook is not None else None,
        )


@dataclass(kw_only=True)
class MessageResult(ResponseMeta):
    """Acknowledgement carrying only a message, e.g. a deleted webhook."""

    message: str = ""

    @classmethod
    def from_json(cls, data: JsonObject) -> "MessageResult":
        return cls(message=get_str(data, "message"))


@dataclass(kw_only=True)
class WebhookTestResult(ResponseMeta):
    """Outcome of a test delivery.

    Attributes:
        status_code: HTTP status the webhook endpoint answered with, if the
            delivery reached it.
    """

    message: str = ""
    status_code: int | None = None

    @classmethod
    def from_json(cls, data: JsonObject) -> "WebhookTestResult":
        return cls(
            message=get_str(data, "message"),
            status_code=get_optional_int(data, "status_code"),
        )


@dataclass(kw_only=True)
class RegenerateSecretResult(ResponseMeta):
    message: str = ""
    secret: str = ""

    @classmethod
    def from_json(cls, data: JsonObject) -> "RegenerateSecretResult":
        return cls(
            message=get_str(data, "message"),
            secret=get_str(data, "secret"),
        )


@dataclass
class PricingPlan:
    name: str = ""
    price: str = ""
    messages: str = ""
    features: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: JsonObject) -> "PricingPlan":
        return cls(
            name=get_str(data, "name"),
            price=get_str(data, "price"),
            messages=get_str(data, "messages"),
            features=get_str_list(data, "features"),
        )


@dataclass(kw_only=True)
class PricingResult(ResponseMeta):
    plans: list[PricingPlan] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: JsonObject) -> "PricingResult":
        return cls(
            plans=[
                PricingPlan.from_json(item) for item in get_object_list(data, "plans")
            ]
        )


@dataclass
class PricingDetailPlan:
    name: str = ""
    tier: str = ""
    price: JsonObject | None = None
    limits: JsonObject | None = None
    features: JsonObject | None = None
    endpoints: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: JsonObject) -> "PricingDetailPlan":
        return cls(
            name=get_str(data, "name"),
            tier=get_str(data, "tier"),
            price=get_object(data, "price"),
            limits=get_object(data, "limits"),
            features=get_object(data, "features"),
            endpoints=get_str_list(data, "endpoints"),
        )


@dataclass(kw_only=True)
class PricingDetailsResult(ResponseMeta):
    plans: list[PricingDetailPlan] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: JsonObject) -> "PricingDetailsResult":
        return cls(
            plans=[
                PricingDetailPlan.from_json(item)
                for item in get_object_list(data, "plans")
            ]
        )


@dataclass
class UsageDay:
    date: str = ""
    total_requests: int = 0
    success_requests: int = 0
    error_requests: int = 0

    @classmethod
    def from_json(cls, data: JsonObject) -> "UsageDay":
        return cls(
            date=get_str(data, "date"),
            total_requests=get_int(data, "total_requests"),
            success_requests=get_int(data, "success_requests"),
            error_requests=get_int(data, "error_requests"),
        )


@dataclass(kw_only=True)
class UsageHistoryResult(ResponseMeta):
    api_key_id: str = ""
    days: list[UsageDay] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: JsonObject) -> "UsageHistoryResult":
        return cls(
            api_key_id=get_str(data, "api_key_id"),
            days=[UsageDay.from_json(item) for item in get_object_list(data, "days")],
        )


@dataclass(kw_only=True)
class UsageByToolResult(ResponseMeta):
    """Request counts for one day, keyed by tool and by endpoint."""

    date: str = ""
    tools: dict[str, int] = field(default_factory=dict)
    endpoints: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: JsonObject) -> "UsageByToolResult":
        return cls(
            date=get_str(data, "date"),
            tools=get_int_dict(data, "tools"),
            endpoints=get_int_dict(data, "endpoints"),
        )


@dataclass(kw_only=True)
class UsageMonthlyResult(ResponseMeta):
    """Current month's billing and usage summary.

    Attributes:
        monthly_usage: The response's ``usage`` object. It is renamed so it
            does not shadow the per-call ``usage`` snapshot.
    """

    tier: str = ""
    tier_display_name: str = ""
    billing: JsonObject | None = None
    monthly_usage: JsonObject | None = None
    rate_limit: JsonObject | None = None
    recommendations: JsonObject | None = None
    links: JsonObject | None = None

    @classmethod
    def from_json(cls, data: JsonObject) -> "UsageMonthlyResult":
        return cls(
            tier=get_str(data, "tier"),
            tier_display_name=get_str(data, "tier_display_name"),
            billing=get_object(data, "billing"),
            monthly_usage=get_object(data, "usage"),
            rate_limit=get_object(data, "rate_limit"),
            recommendations=get_object(data, "recommendations"),
            links=get_object(data, "links"),
        )
