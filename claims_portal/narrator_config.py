"""Claims narrator configuration and persona prompts."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class NarratorConfig:
    """Configuration for the claims narrator.

    The narrator turns structured claim facts into plain-language decision
    explanations and reviews medical bills for anomalies. This configuration
    controls the model, response limits and the points it focuses on.
    """

    name: str = "Claims Narrator"

    # Model Settings
    model: str = "claude-sonnet-4-5-20250929"
    # 600 tokens ~= 450 words, enough for a short decision explanation
    max_tokens: int = 600
    # Low temperature keeps explanations consistent across similar claims
    temperature: float = 0.2

    # Bill review settings
    bill_max_tokens: int = 800
    supported_bill_media_types: tuple[str, ...] = (
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
        "application/pdf",
    )

    decision_factors: list[str] = field(
        default_factory=lambda: [
            "Holder trust score",
            "Hospital trust score",
            "Policy status",
            "Claim amount against the safety cap",
            "Fraud flags",
        ]
    )


CLAIM_DECISION_SYSTEM_PROMPT = """You are an assistant that explains insurance claim decisions to policyholders and claim reviewers.

## Your Communication Style
- Concise and easy to understand
- Name the key factors that influenced the decision
- Never invent facts that are not in the claim data

## Response Format (REQUIRED JSON)
```json
{
  "explanation": "3-5 sentence explanation of why the claim was approved or sent for review",
  "key_factors": ["factor that influenced the decision", "..."]
}
```
"""

BILL_ANOMALY_SYSTEM_PROMPT = """You are an expert fraud detection specialist for medical insurance claims.

Review the medical bill you are given and decide whether it contains anomalies such as duplicate line items or inflated costs.

## Response Format (REQUIRED JSON)
```json
{
  "is_anomalous": true,
  "explanation": "Detailed explanation of the anomalies found, or why the bill looks consistent",
  "flagged_items": ["line item that looks duplicated or inflated", "..."]
}
```
"""

# Default narrator configuration instance
NARRATOR_CONFIG = NarratorConfig()
