"""Typed client for the Tuteliq child-safety API."""

import asyncio
import urllib.parse
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Any, Self, TypeVar

import structlog

from tuteliq.config import DEFAULT_BASE_URL, SDK_VERSION, ClientSettings
from tuteliq.infrastructure.http import (
    ApiResponse,
    ConfigurationError,
    HttpxTransport,
    RequestExecutor,
    RetryPolicy,
    Transport,
    UsageSnapshot,
)
from tuteliq.infrastructure.jsonvalue import JsonValue, as_object
from tuteliq.infrastructure.observability import traced
from tuteliq.modules.safety.schemas import (
    RECOMMENDED_ACTION_PRIORITY,
    AccountDeletionResult,
    AccountExportResult,
    ActionPlanResult,
    AnalyseMultiInput,
    AnalyseMultiResult,
    AnalysisContext,
    AnalyzeResult,
    Audience,
    AuditLogsResult,
    BreachListResult,
    BreachResult,
    BullyingResult,
    ConsentActionResult,
    ConsentStatusResult,
    CreateWebhookInput,
    DetectGroomingInput,
    Detection,
    DetectionInput,
    DetectionResult,
    EmotionsResult,
    GenerateReportInput,
    GetActionPlanInput,
    GroomingResult,
    JsonObject,
    LogBreachInput,
    MessageResult,
    PricingDetailsResult,
    PricingResult,
    RecordConsentInput,
    RectifyDataInput,
    RectifyDataResult,
    RegenerateSecretResult,
    ReportResult,
    ResponseMeta,
    RiskLevel,
    UnsafeResult,
    UpdateBreachInput,
    UpdateWebhookInput,
    UsageByToolResult,
    UsageHistoryResult,
    UsageMonthlyResult,
    WebhookListResult,
    WebhookResult,
    WebhookTestResult,
)

logger = structlog.get_logger()

SDK_IDENTIFIER = "Python SDK"
MIN_API_KEY_LENGTH = 10

R = TypeVar("R", bound=ResponseMeta)


def resolve_platform(platform: str | None = None) -> str:
    """Tag the caller's platform name with the SDK identifier."""
    if platform:
        return f"{platform} - {SDK_IDENTIFIER}"
    return SDK_IDENTIFIER


def context_to_body(context: AnalysisContext | None) -> JsonObject:
    """Render an analysis context; the platform is always present."""
    body: JsonObject = {}
    if context is None:
        body["platform"] = resolve_platform()
        return body

    if context.language:
        body["language"] = context.language
    if context.age_group:
        body["age_group"] = context.age_group
    if context.relationship:
        body["relationship"] = context.relationship
    body["platform"] = resolve_platform(context.platform)
    return body


def _add_tracking(
    body: JsonObject,
    external_id: str | None,
    customer_id: str | None,
    metadata: JsonObject | None,
) -> JsonObject:
    if external_id is not None:
        body["external_id"] = external_id
    if customer_id is not None:
        body["customer_id"] = customer_id
    if metadata is not None:
        body["metadata"] = metadata
    return body


def _with_response_meta(result: R, response: ApiResponse) -> R:
    result.usage = response.usage
    result.request_id = response.request_id
    return result


def _with_query(path: str, **params: Any) -> str:
    """Append the parameters that are not None as a query string."""
    query = urllib.parse.urlencode(
        {name: value for name, value in params.items() if value is not None}
    )
    return f"{path}?{query}" if query else path


def _segment(value: str) -> str:
    return urllib.parse.quote(value, safe="")


class TuteliqClient:
    """Async client for the Tuteliq API.

    Example::

        async with TuteliqClient("your-api-key") as client:
            result = await client.detect_bullying("Some text to analyze")
            if result.is_bullying:
                print(result.severity)
    """

    def __init__(
        self,
        api_key: str,
        *,
        timeout_seconds: float = 30.0,
        max_retries: int = 3,
        retry_delay_seconds: float = 1.0,
        base_url: str = DEFAULT_BASE_URL,
        transport: Transport | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Tuteliq API key.
            timeout_seconds: Request timeout in seconds.
            max_retries: Total attempts per call, including the first.
            retry_delay_seconds: Delay before the first retry; doubles after.
            base_url: API base URL.
            transport: Optional transport; defaults to an httpx transport
                owned (and closed) by this client.
            sleep: Coroutine used for retry backoff.

        Raises:
            ConfigurationError: If the API key or retry settings are invalid.
        """
        if not api_key:
            raise ConfigurationError("API key is required")
        if len(api_key) < MIN_API_KEY_LENGTH:
            raise ConfigurationError("API key appears to be invalid")

        retry_policy = RetryPolicy(
            max_attempts=max_retries, base_delay=retry_delay_seconds
        )

        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpxTransport(
            timeout_seconds=timeout_seconds
        )
        self._executor = RequestExecutor(
            self._transport,
            api_key=api_key,
            base_url=base_url,
            retry_policy=retry_policy,
            user_agent=f"tuteliq-python/{SDK_VERSION}",
            sleep=sleep,
        )

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings | None = None,
        *,
        transport: Transport | None = None,
    ) -> "TuteliqClient":
        """Build a client from ``TUTELIQ_*`` settings.

        Raises:
            ConfigurationError: If no API key is configured.
        """
        settings = settings or ClientSettings()
        if settings.api_key is None:
            raise ConfigurationError("TUTELIQ_API_KEY is not configured")

        return cls(
            settings.api_key.get_secret_value(),
            timeout_seconds=settings.timeout_seconds,
            max_retries=settings.max_retries,
            retry_delay_seconds=settings.retry_delay_seconds,
            base_url=settings.base_url,
            transport=transport,
        )

    @property
    def usage(self) -> UsageSnapshot | None:
        """Usage statistics from the most recent response that reported them."""
        return self._executor.usage

    @property
    def last_request_id(self) -> str | None:
        """Request id from the most recent response that carried one."""
        return self._executor.last_request_id

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self._transport.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        body: JsonValue = None,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> ApiResponse:
        """Execute a raw API call with retries.

        Useful for endpoints this client does not wrap yet.
        """
        return await self._executor.execute(
            method, path, body, cancel_event=cancel_event
        )

    async def _call(
        self,
        method: str,
        path: str,
        body: JsonObject | None,
        cancel_event: asyncio.Event | None,
    ) -> tuple[JsonObject, ApiResponse]:
        response = await self.request(method, path, body, cancel_event=cancel_event)
        return as_object(response.data), response

    # =====================================================================
    # Safety Detection
    # =====================================================================

    @traced("tuteliq.detect_bullying")
    async def detect_bullying(
        self,
        content: str,
        *,
        context: AnalysisContext | None = None,
        external_id: str | None = None,
        customer_id: str | None = None,
        metadata: JsonObject | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> BullyingResult:
        """Detect bullying in content."""
        body = _add_tracking(
            {"text": content, "context": context_to_body(context)},
            external_id,
            customer_id,
            metadata,
        )
        data, response = await self._call(
            "POST", "/api/v1/safety/bullying", body, cancel_event
        )
        return _with_response_meta(BullyingResult.from_json(data), response)

    @traced("tuteliq.detect_grooming")
    async def detect_grooming(
        self,
        grooming_input: DetectGroomingInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> GroomingResult:
        """Detect grooming patterns in a conversation."""
        messages: list[JsonValue] = [
            {"sender_role": message.role.value, "text": message.content}
            for message in grooming_input.messages
        ]

        context: JsonObject = {}
        if grooming_input.child_age is not None:
            context["child_age"] = grooming_input.child_age
        if grooming_input.context is not None:
            context.update(context_to_body(grooming_input.context))
        context.setdefault("platform", resolve_platform())

        body = _add_tracking(
            {"messages": messages, "context": context},
            grooming_input.external_id,
            grooming_input.customer_id,
            grooming_input.metadata,
        )
        data, response = await self._call(
            "POST", "/api/v1/safety/grooming", body, cancel_event
        )
        return _with_response_meta(GroomingResult.from_json(data), response)

    @traced("tuteliq.detect_unsafe")
    async def detect_unsafe(
        self,
        content: str,
        *,
        context: AnalysisContext | None = None,
        external_id: str | None = None,
        customer_id: str | None = None,
        metadata: JsonObject | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> UnsafeResult:
        """Detect unsafe content."""
        body = _add_tracking(
            {"text": content, "context": context_to_body(context)},
            external_id,
            customer_id,
            metadata,
        )
        data, response = await self._call(
            "POST", "/api/v1/safety/unsafe", body, cancel_event
        )
        return _with_response_meta(UnsafeResult.from_json(data), response)

    @traced("tuteliq.analyze")
    async def analyze(
        self,
        content: str,
        *,
        context: AnalysisContext | None = None,
        include: list[str] | None = None,
        external_id: str | None = None,
        customer_id: str | None = None,
        metadata: JsonObject | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> AnalyzeResult:
        """Quick analysis: runs bullying and unsafe detection.

        Args:
            content: Text to analyze.
            include: Checks to run; defaults to ``["bullying", "unsafe"]``.

        Returns:
            The sub-results combined into one risk level, summary and
            recommended action.
        """
        checks = include if include is not None else ["bullying", "unsafe"]
        tracking: dict[str, Any] = {
            "context": context,
            "external_id": external_id,
            "customer_id": customer_id,
            "metadata": metadata,
            "cancel_event": cancel_event,
        }

        bullying: BullyingResult | None = None
        unsafe: UnsafeResult | None = None
        max_risk_score = 0.0

        if "bullying" in checks:
            bullying = await self.detect_bullying(content, **tracking)
            max_risk_score = max(max_risk_score, bullying.risk_score)

        if "unsafe" in checks:
            unsafe = await self.detect_unsafe(content, **tracking)
            max_risk_score = max(max_risk_score, unsafe.risk_score)

        findings: list[str] = []
        if bullying is not None and bullying.is_bullying:
            findings.append(f"Bullying detected ({bullying.severity.value})")
        if unsafe is not None and unsafe.unsafe:
            findings.append(f"Unsafe content: {', '.join(unsafe.categories)}")
        summary = ". ".join(findings) if findings else "No safety concerns detected."

        sub_results: list[BullyingResult | UnsafeResult] = [
            r for r in (bullying, unsafe) if r is not None
        ]
        actions = {r.recommended_action for r in sub_results}
        recommended_action = next(
            (a for a in RECOMMENDED_ACTION_PRIORITY if a in actions), "none"
        )

        credits_used: int | None = None
        if any(r.credits_used is not None for r in sub_results):
            credits_used = sum(r.credits_used or 0 for r in sub_results)

        last = sub_results[-1] if sub_results else None
        return AnalyzeResult(
            risk_level=RiskLevel.from_score(max_risk_score),
            risk_score=max_risk_score,
            summary=summary,
            bullying=bullying,
            unsafe=unsafe,
            recommended_action=recommended_action,
            credits_used=credits_used,
            external_id=external_id or "",
            customer_id=customer_id or "",
            metadata=metadata,
            usage=last.usage if last else None,
            request_id=last.request_id if last else None,
        )

    # =====================================================================
    # Emotion Analysis, Guidance and Reports
    # =====================================================================

    @traced("tuteliq.analyze_emotions")
    async def analyze_emotions(
        self,
        content: str,
        *,
        context: AnalysisContext | None = None,
        external_id: str | None = None,
        customer_id: str | None = None,
        metadata: JsonObject | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> EmotionsResult:
        """Analyze emotions in content."""
        body = _add_tracking(
            {
                "messages": [{"sender": "user", "text": content}],
                "context": context_to_body(context),
            },
            external_id,
            customer_id,
            metadata,
        )
        data, response = await self._call(
            "POST", "/api/v1/analysis/emotions", body, cancel_event
        )
        return _with_response_meta(EmotionsResult.from_json(data), response)

    @traced("tuteliq.get_action_plan")
    async def get_action_plan(
        self,
        plan_input: GetActionPlanInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> ActionPlanResult:
        """Get age-appropriate action guidance."""
        body: JsonObject = {
            "role": (plan_input.audience or Audience.PARENT).value,
            "situation": plan_input.situation,
            "context": {"platform": resolve_platform()},
        }
        if plan_input.child_age is not None:
            body["child_age"] = plan_input.child_age
        if plan_input.severity is not None:
            body["severity"] = plan_input.severity.value
        _add_tracking(
            body, plan_input.external_id, plan_input.customer_id, plan_input.metadata
        )

        data, response = await self._call(
            "POST", "/api/v1/guidance/action-plan", body, cancel_event
        )
        return _with_response_meta(ActionPlanResult.from_json(data), response)

    @traced("tuteliq.generate_report")
    async def generate_report(
        self,
        report_input: GenerateReportInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> ReportResult:
        """Generate an incident report from a conversation."""
        body: JsonObject = {
            "messages": [
                {"sender": message.sender, "text": message.content}
                for message in report_input.messages
            ]
        }

        meta: JsonObject = {}
        if report_input.child_age is not None:
            meta["child_age"] = report_input.child_age
        if report_input.incident_type is not None:
            meta["type"] = report_input.incident_type
        if meta:
            body["meta"] = meta

        body["context"] = {"platform": resolve_platform()}
        _add_tracking(
            body,
            report_input.external_id,
            report_input.customer_id,
            report_input.metadata,
        )

        data, response = await self._call(
            "POST", "/api/v1/reports/incident", body, cancel_event
        )
        return _with_response_meta(ReportResult.from_json(data), response)

    # =====================================================================
    # Fraud and Harm Detection
    # =====================================================================

    async def _detect(
        self,
        detection: Detection,
        detection_input: DetectionInput,
        cancel_event: asyncio.Event | None,
    ) -> DetectionResult:
        context = context_to_body(detection_input.context)
        body: JsonObject = {"text": detection_input.content, "context": context}
        if detection_input.include_evidence:
            body["include_evidence"] = True
        _add_tracking(
            body,
            detection_input.external_id,
            detection_input.customer_id,
            detection_input.metadata,
        )

        data, response = await self._call(
            "POST", f"/api/v1/fraud/{detection.value}", body, cancel_event
        )
        return _with_response_meta(DetectionResult.from_json(data), response)

    @traced("tuteliq.detect_social_engineering")
    async def detect_social_engineering(
        self,
        detection_input: DetectionInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> DetectionResult:
        return await self._detect(
            Detection.SOCIAL_ENGINEERING, detection_input, cancel_event
        )

    @traced("tuteliq.detect_app_fraud")
    async def detect_app_fraud(
        self,
        detection_input: DetectionInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> DetectionResult:
        return await self._detect(Detection.APP_FRAUD, detection_input, cancel_event)

    @traced("tuteliq.detect_romance_scam")
    async def detect_romance_scam(
        self,
        detection_input: DetectionInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> DetectionResult:
        return await self._detect(Detection.ROMANCE_SCAM, detection_input, cancel_event)

    @traced("tuteliq.detect_mule_recruitment")
    async def detect_mule_recruitment(
        self,
        detection_input: DetectionInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> DetectionResult:
        return await self._detect(
            Detection.MULE_RECRUITMENT, detection_input, cancel_event
        )

    @traced("tuteliq.detect_gambling_harm")
    async def detect_gambling_harm(
        self,
        detection_input: DetectionInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> DetectionResult:
        return await self._detect(
            Detection.GAMBLING_HARM, detection_input, cancel_event
        )

    @traced("tuteliq.detect_coercive_control")
    async def detect_coercive_control(
        self,
        detection_input: DetectionInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> DetectionResult:
        return await self._detect(
            Detection.COERCIVE_CONTROL, detection_input, cancel_event
        )

    @traced("tuteliq.detect_vulnerability_exploitation")
    async def detect_vulnerability_exploitation(
        self,
        detection_input: DetectionInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> DetectionResult:
        return await self._detect(
            Detection.VULNERABILITY_EXPLOITATION, detection_input, cancel_event
        )

    @traced("tuteliq.detect_radicalisation")
    async def detect_radicalisation(
        self,
        detection_input: DetectionInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> DetectionResult:
        return await self._detect(
            Detection.RADICALISATION, detection_input, cancel_event
        )

    @traced("tuteliq.analyse_multi")
    async def analyse_multi(
        self,
        multi_input: AnalyseMultiInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> AnalyseMultiResult:
        """Run several detection endpoints in a single request."""
        body: JsonObject = {
            "text": multi_input.content,
            "endpoints": [d.value for d in multi_input.detections],
            "context": context_to_body(multi_input.context),
        }
        if multi_input.include_evidence:
            body["options"] = {"include_evidence": True}
        _add_tracking(
            body,
            multi_input.external_id,
            multi_input.customer_id,
            multi_input.metadata,
        )

        data, response = await self._call(
            "POST", "/api/v1/analyse/multi", body, cancel_event
        )
        return _with_response_meta(AnalyseMultiResult.from_json(data), response)

    # =====================================================================
    # Account (GDPR)
    # =====================================================================

    @traced("tuteliq.delete_account_data")
    async def delete_account_data(
        self, *, cancel_event: asyncio.Event | None = None
    ) -> AccountDeletionResult:
        """Delete all account data (GDPR right to erasure)."""
        data, response = await self._call(
            "DELETE", "/api/v1/account/data", None, cancel_event
        )
        logger.info("account_data_deleted", deleted_count=data.get("deleted_count"))
        return _with_response_meta(AccountDeletionResult.from_json(data), response)

    @traced("tuteliq.export_account_data")
    async def export_account_data(
        self, *, cancel_event: asyncio.Event | None = None
    ) -> AccountExportResult:
        """Export all account data (GDPR right to data portability)."""
        data, response = await self._call(
            "GET", "/api/v1/account/export", None, cancel_event
        )
        return _with_response_meta(AccountExportResult.from_json(data), response)

    @traced("tuteliq.rectify_data")
    async def rectify_data(
        self,
        rectify_input: RectifyDataInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> RectifyDataResult:
        """Correct fields of a stored document (GDPR right to rectification)."""
        body: JsonObject = {
            "collection": rectify_input.collection,
            "document_id": rectify_input.document_id,
            "fields": rectify_input.fields,
            "context": {"platform": resolve_platform()},
        }
        data, response = await self._call(
            "PATCH", "/api/v1/account/data", body, cancel_event
        )
        return _with_response_meta(RectifyDataResult.from_json(data), response)

    @traced("tuteliq.record_consent")
    async def record_consent(
        self,
        consent_input: RecordConsentInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> ConsentActionResult:
        """Record that the user gave a consent."""
        body: JsonObject = {
            "consent_type": consent_input.consent_type,
            "version": consent_input.version,
            "context": {"platform": resolve_platform()},
        }
        data, response = await self._call(
            "POST", "/api/v1/account/consent", body, cancel_event
        )
        return _with_response_meta(ConsentActionResult.from_json(data), response)

    @traced("tuteliq.get_consent_status")
    async def get_consent_status(
        self,
        consent_type: str | None = None,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> ConsentStatusResult:
        """List consents, optionally only those of one type."""
        path = _with_query("/api/v1/account/consent", type=consent_type)
        data, response = await self._call("GET", path, None, cancel_event)
        return _with_response_meta(ConsentStatusResult.from_json(data), response)

    @traced("tuteliq.withdraw_consent")
    async def withdraw_consent(
        self,
        consent_type: str,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> ConsentActionResult:
        """Withdraw a previously recorded consent."""
        data, response = await self._call(
            "DELETE",
            f"/api/v1/account/consent/{_segment(consent_type)}",
            None,
            cancel_event,
        )
        return _with_response_meta(ConsentActionResult.from_json(data), response)

    @traced("tuteliq.get_audit_logs")
    async def get_audit_logs(
        self,
        *,
        action: str | None = None,
        limit: int | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> AuditLogsResult:
        """Get the account's audit trail (GDPR right of access)."""
        path = _with_query("/api/v1/account/audit-logs", action=action, limit=limit)
        data, response = await self._call("GET", path, None, cancel_event)
        return _with_response_meta(AuditLogsResult.from_json(data), response)

    # =====================================================================
    # Breach Management
    # =====================================================================

    @traced("tuteliq.log_breach")
    async def log_breach(
        self,
        breach_input: LogBreachInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> BreachResult:
        """Log a personal-data breach."""
        body: JsonObject = {
            "title": breach_input.title,
            "description": breach_input.description,
            "severity": breach_input.severity,
            "affected_user_ids": list(breach_input.affected_user_ids),
            "data_categories": list(breach_input.data_categories),
            "reported_by": breach_input.reported_by,
            "context": {"platform": resolve_platform()},
        }
        data, response = await self._call(
            "POST", "/api/v1/admin/breach", body, cancel_event
        )
        result = _with_response_meta(BreachResult.from_json(data), response)
        logger.info("breach_logged", breach_id=result.breach.id)
        return result

    @traced("tuteliq.list_breaches")
    async def list_breaches(
        self,
        *,
        status: str | None = None,
        limit: int | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> BreachListResult:
        path = _with_query("/api/v1/admin/breach", status=status, limit=limit)
        data, response = await self._call("GET", path, None, cancel_event)
        return _with_response_meta(BreachListResult.from_json(data), response)

    @traced("tuteliq.get_breach")
    async def get_breach(
        self,
        breach_id: str,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> BreachResult:
        data, response = await self._call(
            "GET", f"/api/v1/admin/breach/{_segment(breach_id)}", None, cancel_event
        )
        return _with_response_meta(BreachResult.from_json(data), response)

    @traced("tuteliq.update_breach_status")
    async def update_breach_status(
        self,
        breach_id: str,
        update_input: UpdateBreachInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> BreachResult:
        """Move a breach through its investigation and notification states."""
        body: JsonObject = {"status": update_input.status}
        if update_input.notification_status is not None:
            body["notification_status"] = update_input.notification_status
        if update_input.notes is not None:
            body["notes"] = update_input.notes
        body["context"] = {"platform": resolve_platform()}

        data, response = await self._call(
            "PATCH", f"/api/v1/admin/breach/{_segment(breach_id)}", body, cancel_event
        )
        return _with_response_meta(BreachResult.from_json(data), response)

    # =====================================================================
    # Webhooks
    # =====================================================================

    @traced("tuteliq.list_webhooks")
    async def list_webhooks(
        self, *, cancel_event: asyncio.Event | None = None
    ) -> WebhookListResult:
        data, response = await self._call(
            "GET", "/api/v1/webhooks", None, cancel_event
        )
        return _with_response_meta(WebhookListResult.from_json(data), response)

    @traced("tuteliq.create_webhook")
    async def create_webhook(
        self,
        webhook_input: CreateWebhookInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> WebhookResult:
        """Register a webhook for the given events."""
        body: JsonObject = {
            "url": webhook_input.url,
            "events": list(webhook_input.events),
            "active": webhook_input.active,
            "context": {"platform": resolve_platform()},
        }
        data, response = await self._call(
            "POST", "/api/v1/webhooks", body, cancel_event
        )
        return _with_response_meta(WebhookResult.from_json(data), response)

    @traced("tuteliq.update_webhook")
    async def update_webhook(
        self,
        webhook_id: str,
        update_input: UpdateWebhookInput,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> WebhookResult:
        """Change a webhook. Only the fields that are set are sent."""
        body: JsonObject = {}
        if update_input.url is not None:
            body["url"] = update_input.url
        if update_input.events is not None:
            body["events"] = list(update_input.events)
        if update_input.active is not None:
            body["active"] = update_input.active
        body["context"] = {"platform": resolve_platform()}

        data, response = await self._call(
            "PATCH", f"/api/v1/webhooks/{_segment(webhook_id)}", body, cancel_event
        )
        return _with_response_meta(WebhookResult.from_json(data), response)

    @traced("tuteliq.delete_webhook")
    async def delete_webhook(
        self,
        webhook_id: str,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> MessageResult:
        data, response = await self._call(
            "DELETE", f"/api/v1/webhooks/{_segment(webhook_id)}", None, cancel_event
        )
        return _with_response_meta(MessageResult.from_json(data), response)

    @traced("tuteliq.test_webhook")
    async def test_webhook(
        self,
        webhook_id: str,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> WebhookTestResult:
        """Ask the API to send a test event to the webhook."""
        body: JsonObject = {"context": {"platform": resolve_platform()}}
        data, response = await self._call(
            "POST",
            f"/api/v1/webhooks/{_segment(webhook_id)}/test",
            body,
            cancel_event,
        )
        return _with_response_meta(WebhookTestResult.from_json(data), response)

    @traced("tuteliq.regenerate_webhook_secret")
    async def regenerate_webhook_secret(
        self,
        webhook_id: str,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> RegenerateSecretResult:
        """Replace the webhook's signing secret."""
        body: JsonObject = {"context": {"platform": resolve_platform()}}
        data, response = await self._call(
            "POST",
            f"/api/v1/webhooks/{_segment(webhook_id)}/secret",
            body,
            cancel_event,
        )
        return _with_response_meta(RegenerateSecretResult.from_json(data), response)

    # =====================================================================
    # Pricing and Usage
    # =====================================================================

    @traced("tuteliq.get_pricing")
    async def get_pricing(
        self, *, cancel_event: asyncio.Event | None = None
    ) -> PricingResult:
        """Get the overview of pricing plans."""
        data, response = await self._call("GET", "/api/v1/pricing", None, cancel_event)
        return _with_response_meta(PricingResult.from_json(data), response)

    @traced("tuteliq.get_pricing_details")
    async def get_pricing_details(
        self, *, cancel_event: asyncio.Event | None = None
    ) -> PricingDetailsResult:
        """Get per-plan prices, limits, features and endpoints."""
        data, response = await self._call(
            "GET", "/api/v1/pricing/details", None, cancel_event
        )
        return _with_response_meta(PricingDetailsResult.from_json(data), response)

    @traced("tuteliq.get_usage_history")
    async def get_usage_history(
        self,
        days: int | None = None,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> UsageHistoryResult:
        """Get daily request counts for the API key."""
        path = _with_query("/api/v1/usage/history", days=days)
        data, response = await self._call("GET", path, None, cancel_event)
        return _with_response_meta(UsageHistoryResult.from_json(data), response)

    @traced("tuteliq.get_usage_by_tool")
    async def get_usage_by_tool(
        self,
        date: str | None = None,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> UsageByToolResult:
        """Get one day's request counts per tool and per endpoint."""
        path = _with_query("/api/v1/usage/tools", date=date)
        data, response = await self._call("GET", path, None, cancel_event)
        return _with_response_meta(UsageByToolResult.from_json(data), response)

    @traced("tuteliq.get_usage_monthly")
    async def get_usage_monthly(
        self, *, cancel_event: asyncio.Event | None = None
    ) -> UsageMonthlyResult:
        """Get the current month's usage, billing and rate-limit summary."""
        data, response = await self._call(
            "GET", "/api/v1/usage/monthly", None, cancel_event
        )
        return _with_response_meta(UsageMonthlyResult.from_json(data), response)
