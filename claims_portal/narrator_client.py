"""Claude API client for claim narratives.

This module provides the narrative generator used outside the scoring core:
- explain_claim_decision: plain-language explanation of a claim decision
- detect_anomalous_bill: review of a medical bill for duplicates or inflated costs

Both calls are non-deterministic and live behind ``NarrativeGenerator`` so
callers and tests can swap in canned responses.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import os
import re
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from typing import Any

import anthropic

from .narrator_config import (
    BILL_ANOMALY_SYSTEM_PROMPT,
    CLAIM_DECISION_SYSTEM_PROMPT,
    NARRATOR_CONFIG,
    NarratorConfig,
)

logger = logging.getLogger(__name__)

_DATA_URI_PATTERN = re.compile(
    r"^data:(?P<media_type>[\w.+-]+/[\w.+-]+);base64,(?P<data>[A-Za-z0-9+/=\s]+)$"
)


@dataclass(frozen=True)
class ClaimDecisionFacts:
    """Structured facts a claim decision is explained from."""

    holder_trust_score: int
    hospital_trust_score: int
    policy_active: bool
    claim_amount: float
    safety_cap: float
    fraud_flags: bool
    auto_approve: bool
    medical_documents: str = ""
    bills: str = ""
    doctor_notes: str = ""


@dataclass
class ClaimExplanation:
    explanation: str
    key_factors: list[str] = field(default_factory=list)
    model: str = "none"
    tokens_used: int = 0
    structured: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class BillAnomalyReport:
    """Outcome of a bill review.

    ``is_anomalous`` is None when no review ran or the reply carried no
    boolean verdict.
    """

    is_anomalous: bool | None
    explanation: str
    flagged_items: list[str] = field(default_factory=list)
    model: str = "none"
    tokens_used: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class NarrativeGenerator(ABC):
    """Interface for services that narrate claim decisions and review bills."""

    @abstractmethod
    def explain_claim_decision(self, facts: ClaimDecisionFacts) -> ClaimExplanation:
        """Explain why a claim was auto-approved or held for review."""

    @abstractmethod
    def detect_anomalous_bill(self, bill_data_uri: str) -> BillAnomalyReport:
        """Review a bill given as a base64 data URI."""


def parse_structured_response(text: str) -> dict[str, Any] | None:
    """Parse structured JSON response from Claude.

    Handles JSON inside markdown code blocks, raw JSON, and JSON embedded in
    surrounding prose. Only a JSON object counts; arrays and scalars are
    skipped. Returns None if no object parses.
    """
    if not text:
        return None

    candidates = []
    block = re.search(r"```(?:json)?\s*([\s\S]*?)```", text)
    if block:
        candidates.append(block.group(1).strip())
    candidates.append(text.strip())
    embedded = re.search(r"\{[\s\S]*\}", text)
    if embedded:
        candidates.append(embedded.group(0))

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed

    return None


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def _text_field(structured: dict[str, Any], key: str, default: str) -> str:
    value = structured.get(key)
    return value if isinstance(value, str) and value else default


def parse_data_uri(data_uri: str) -> tuple[str, str]:
    """Split a ``data:<mime>;base64,<data>`` URI into media type and payload.

    Raises:
        ValueError: if the URI is not base64 data URI or the payload is not
            valid base64.
    """
    match = _DATA_URI_PATTERN.match(data_uri.strip()) if data_uri else None
    if not match:
        raise ValueError(
            "Bill must be a data URI of the form 'data:<mimetype>;base64,<encoded_data>'"
        )
    payload = re.sub(r"\s+", "", match.group("data"))
    try:
        base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Bill data is not valid base64: {e}") from e
    return match.group("media_type").lower(), payload


def build_claim_decision_prompt(facts: ClaimDecisionFacts) -> str:
    """Build the user prompt for a claim decision explanation."""
    decision = "auto-approved" if facts.auto_approve else "not auto-approved"
    return f"""Explain why this insurance claim was {decision}.

## Claim Facts
- Holder Trust Score: {facts.holder_trust_score}
- Hospital Trust Score: {facts.hospital_trust_score}
- Policy Active: {facts.policy_active}
- Claim Amount: {facts.claim_amount:.2f}
- Safety Cap: {facts.safety_cap:.2f}
- Fraud Flags: {facts.fraud_flags}
- Auto Approve: {facts.auto_approve}

## Medical Documents
{facts.medical_documents or "None provided."}

## Bills
{facts.bills or "None provided."}

## Doctor Notes
{facts.doctor_notes or "None provided."}

Respond with ONLY valid JSON following the response format specified in your instructions."""


def _fallback_key_factors(facts: ClaimDecisionFacts) -> list[str]:
    factors = [
        f"Holder trust score {facts.holder_trust_score}",
        f"Hospital trust score {facts.hospital_trust_score}",
    ]
    if not facts.policy_active:
        factors.append("Policy is not active")
    if facts.claim_amount > facts.safety_cap:
        factors.append("Claim amount exceeds the auto-approval safety cap")
    if facts.fraud_flags:
        factors.append("Fraud flags raised on this claim")
    return factors


class ClaudeNarrator(NarrativeGenerator):
    """Narrative generator backed by the Anthropic Messages API."""

    def __init__(
        self, config: NarratorConfig | None = None, api_key: str | None = None
    ) -> None:
        self.config = config or NARRATOR_CONFIG
        self._api_key = api_key

    @property
    def api_key(self) -> str | None:
        return self._api_key or os.getenv("ANTHROPIC_API_KEY")

    def _client(self) -> anthropic.Anthropic:
        return anthropic.Anthropic(api_key=self.api_key)

    def explain_claim_decision(self, facts: ClaimDecisionFacts) -> ClaimExplanation:
        if not self.api_key:
            return ClaimExplanation(
                explanation=(
                    "Claim narration is not available - Anthropic API key not configured."
                ),
                key_factors=_fallback_key_factors(facts),
                model="none",
            )

        try:
            response = self._client().messages.create(
                model=self.config.model,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                system=CLAIM_DECISION_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": build_claim_decision_prompt(facts)}],
            )
        except anthropic.APIError as e:
            logger.warning(f"Claim explanation request failed: {e}")
            return ClaimExplanation(
                explanation=f"Claude API error: {e!s}. Review the claim factors manually.",
                key_factors=_fallback_key_factors(facts),
                model="error",
            )

        content = response.content[0].text if response.content else ""
        structured = parse_structured_response(content)
        if structured:
            explanation = _text_field(structured, "explanation", content)
            key_factors = _string_list(structured.get("key_factors"))
        else:
            explanation = content
            key_factors = []

        return ClaimExplanation(
            explanation=explanation,
            key_factors=key_factors or _fallback_key_factors(facts),
            model=self.config.model,
            tokens_used=response.usage.input_tokens + response.usage.output_tokens,
            structured=structured,
        )

    def detect_anomalous_bill(self, bill_data_uri: str) -> BillAnomalyReport:
        media_type, payload = parse_data_uri(bill_data_uri)
        if media_type not in self.config.supported_bill_media_types:
            raise ValueError(f"Unsupported bill media type: {media_type}")

        if not self.api_key:
            return BillAnomalyReport(
                is_anomalous=None,
                explanation=(
                    "Bill review is not available - Anthropic API key not configured. "
                    "Review the bill manually."
                ),
                model="none",
            )

        block_type = "document" if media_type == "application/pdf" else "image"
        content = [
            {
                "type": block_type,
                "source": {"type": "base64", "media_type": media_type, "data": payload},
            },
            {
                "type": "text",
                "text": "Review this medical bill. Respond with ONLY valid JSON.",
            },
        ]

        try:
            response = self._client().messages.create(
                model=self.config.model,
                max_tokens=self.config.bill_max_tokens,
                temperature=self.config.temperature,
                system=BILL_ANOMALY_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": content}],
            )
        except anthropic.APIError as e:
            logger.warning(f"Bill anomaly request failed: {e}")
            return BillAnomalyReport(
                is_anomalous=None,
                explanation=f"Claude API error: {e!s}. Review the bill manually.",
                model="error",
            )

        text = response.content[0].text if response.content else ""
        structured = parse_structured_response(text) or {}
        is_anomalous = structured.get("is_anomalous")
        if not isinstance(is_anomalous, bool):
            is_anomalous = None

        return BillAnomalyReport(
            is_anomalous=is_anomalous,
            explanation=_text_field(structured, "explanation", text),
            flagged_items=_string_list(structured.get("flagged_items")),
            model=self.config.model,
            tokens_used=response.usage.input_tokens + response.usage.output_tokens,
        )


def get_narrator() -> NarrativeGenerator:
    """Return the default narrator; routes use this as a FastAPI dependency."""
    return ClaudeNarrator(NARRATOR_CONFIG)
