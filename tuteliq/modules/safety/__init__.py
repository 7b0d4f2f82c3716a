"""Tuteliq safety endpoints: typed client, inputs and results."""

from tuteliq.modules.safety.client import TuteliqClient, resolve_platform
from tuteliq.modules.safety.schemas import (
    AccountDeletionResult,
    AccountExportResult,
    ActionPlanResult,
    AgeCalibration,
    AnalyseMultiInput,
    AnalyseMultiResult,
    AnalyseMultiSummary,
    AnalysisContext,
    AnalyzeResult,
    ApiResult,
    Audience,
    AuditLogEntry,
    AuditLogsResult,
    BreachListResult,
    BreachRecord,
    BreachResult,
    BullyingResult,
    ConsentActionResult,
    ConsentRecord,
    ConsentStatusResult,
    CreateWebhookInput,
    DetectGroomingInput,
    Detection,
    DetectionCategory,
    DetectionEvidence,
    DetectionInput,
    DetectionResult,
    EmotionTrend,
    EmotionsResult,
    GenerateReportInput,
    GetActionPlanInput,
    GroomingMessage,
    GroomingResult,
    GroomingRisk,
    LogBreachInput,
    MessageResult,
    MessageRole,
    PricingDetailPlan,
    PricingDetailsResult,
    PricingPlan,
    PricingResult,
    RecordConsentInput,
    RectifyDataInput,
    RectifyDataResult,
    RegenerateSecretResult,
    ReportMessage,
    ReportResult,
    ResponseMeta,
    RiskLevel,
    Severity,
    UnsafeResult,
    UpdateBreachInput,
    UpdateWebhookInput,
    UsageByToolResult,
    UsageDay,
    UsageHistoryResult,
    UsageMonthlyResult,
    WebhookInfo,
    WebhookListResult,
    WebhookResult,
    WebhookTestResult,
)

__all__ = [
    "AccountDeletionResult",
    "AccountExportResult",
    "ActionPlanResult",
    "AgeCalibration",
    "AnalyseMultiInput",
    "AnalyseMultiResult",
    "AnalyseMultiSummary",
    "AnalysisContext",
    "AnalyzeResult",
    "ApiResult",
    "Audience",
    "AuditLogEntry",
    "AuditLogsResult",
    "BreachListResult",
    "BreachRecord",
    "BreachResult",
    "BullyingResult",
    "ConsentActionResult",
    "ConsentRecord",
    "ConsentStatusResult",
    "CreateWebhookInput",
    "DetectGroomingInput",
    "Detection",
    "DetectionCategory",
    "DetectionEvidence",
    "DetectionInput",
    "DetectionResult",
    "EmotionTrend",
    "EmotionsResult",
    "GenerateReportInput",
    "GetActionPlanInput",
    "GroomingMessage",
    "GroomingResult",
    "GroomingRisk",
    "LogBreachInput",
    "MessageResult",
    "MessageRole",
    "PricingDetailPlan",
    "PricingDetailsResult",
    "PricingPlan",
    "PricingResult",
    "RecordConsentInput",
    "RectifyDataInput",
    "RectifyDataResult",
    "RegenerateSecretResult",
    "ReportMessage",
    "ReportResult",
    "ResponseMeta",
    "RiskLevel",
    "Severity",
    "TuteliqClient",
    "UnsafeResult",
    "UpdateBreachInput",
    "UpdateWebhookInput",
    "UsageByToolResult",
    "UsageDay",
    "UsageHistoryResult",
    "UsageMonthlyResult",
    "WebhookInfo",
    "WebhookListResult",
    "WebhookResult",
    "WebhookTestResult",
    "resolve_platform",
]
