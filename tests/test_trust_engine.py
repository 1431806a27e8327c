"""Tests for the trust score engine."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone

import pytest

from claims_portal.trust import (
    ClaimRecord,
    ClaimStatus,
    InvalidHolderInputError,
    ScoreCapPolicy,
    ThresholdConfig,
    TrustCategory,
    compute_trust_score,
    validate_holder_inputs,
)


class TestEndToEndScenarios:
    """Full scoring runs for representative holders."""

    def test_fully_trusted_holder_standard_cap(self, holder_factory, evaluated_at):
        """A clean, verified, long-tenured holder scores 95 under the 100 cap."""
        holder = holder_factory(policy_start=date(2022, 1, 1), on_time_ratio=0.97)

        result = compute_trust_score(holder, [], now=evaluated_at)

        breakdown = result.breakdown
        assert breakdown.identity.score == 20
        assert breakdown.policy_health.score == 20
        assert breakdown.payment_behavior.score == 25
        assert breakdown.claim_behavior.score == 20
        assert breakdown.document_completeness.score == 10
        assert breakdown.fraud_penalties.score == 0
        assert result.raw_score == 95
        assert result.final_score == 95
        assert result.max_score == 100
        assert result.category == TrustCategory.HIGHLY_TRUSTED

    def test_fully_trusted_holder_operational_cap(self, holder_factory, evaluated_at):
        """The same holder is capped at 85 under the operational policy."""
        holder = holder_factory(policy_start=date(2022, 1, 1), on_time_ratio=0.97)

        result = compute_trust_score(
            holder,
            [],
            now=evaluated_at,
            threshold_config=ThresholdConfig.for_policy(ScoreCapPolicy.OPERATIONAL),
        )

        assert result.raw_score == 95
        assert result.final_score == 85
        assert result.max_score == 85
        assert result.category == TrustCategory.HIGHLY_TRUSTED

    def test_high_risk_holder_clamped_to_zero(
        self, holder_factory, claims_factory, evaluated_at
    ):
        """Unverified holder under investigation sums to -30 and clamps to 0."""
        holder = holder_factory(
            aadhaar=False,
            pan=False,
            mobile=False,
            policy_document=False,
            bank_proof=False,
            policy_start=None,
            on_time_ratio=0.3,
            past_fraud_alerts=True,
            active_investigation=True,
        )
        claims = claims_factory(rejected=1, approved=3)

        result = compute_trust_score(holder, claims, now=evaluated_at)

        breakdown = result.breakdown
        assert breakdown.identity.score == 0
        assert breakdown.policy_health.score == 0
        assert breakdown.payment_behavior.score == 0
        assert breakdown.claim_behavior.score == 0
        assert breakdown.document_completeness.score == -5
        assert breakdown.fraud_penalties.score == -25
        assert result.raw_score == -30
        assert result.final_score == 0
        assert result.category == TrustCategory.HIGH_RISK
        assert result.explanation_points == []


class TestExplanationPoints:
    """Explanation ordering and truncation."""

    def test_truncated_to_first_five_in_rule_order(self, holder_factory, evaluated_at):
        holder = holder_factory(policy_start=date(2022, 1, 1))

        result = compute_trust_score(holder, [], now=evaluated_at)

        assert result.explanation_points == [
            "All identity documents are fully verified.",
            "Long policy tenure of 2 years.",
            "Excellent history of on-time premium payments.",
            "No history of rejected claims.",
            "Low frequency of claims filed.",
        ]

    def test_fewer_than_five_returned_as_is(
        self, holder_factory, claims_factory, evaluated_at
    ):
        holder = holder_factory(pan=False, policy_start=None, on_time_ratio=0.5)
        claims = claims_factory(rejected=1, approved=4)

        result = compute_trust_score(holder, claims, now=evaluated_at)

        assert result.explanation_points == [
            "All mandatory documents are complete.",
            "No past fraud flags or investigations.",
        ]

    def test_never_more_than_five(self, holder_factory, evaluated_at):
        holder = holder_factory()

        result = compute_trust_score(holder, [], now=evaluated_at)

        assert len(result.explanation_points) <= 5


class TestEngineBehavior:
    """General engine properties."""

    def test_identical_inputs_identical_outputs(
        self, holder_factory, claims_factory, evaluated_at
    ):
        holder = holder_factory(on_time_ratio=0.85)
        claims = claims_factory(approved=2)

        first = compute_trust_score(holder, claims, now=evaluated_at)
        second = compute_trust_score(holder, claims, now=evaluated_at)

        assert first == second

    def test_accepts_datetime_evaluation_instant(self, holder_factory):
        holder = holder_factory(policy_start=date(2023, 7, 1))
        now = datetime(2024, 7, 1, 9, 30, tzinfo=timezone.utc)

        result = compute_trust_score(holder, [], now=now)

        assert result.breakdown.policy_health.score == 17

    def test_defaults_to_current_time(self, holder_factory):
        holder = holder_factory(policy_start=date(2000, 1, 1))

        result = compute_trust_score(holder, [])

        assert result.breakdown.policy_health.score == 20

    def test_accepts_any_iterable_of_claims(
        self, holder_factory, claims_factory, evaluated_at
    ):
        holder = holder_factory()
        claims = claims_factory(rejected=1, approved=1)

        result = compute_trust_score(holder, iter(claims), now=evaluated_at)

        assert result.breakdown.claim_behavior.score == 0

    def test_final_score_within_bounds(
        self, holder_factory, claims_factory, evaluated_at
    ):
        for cap_policy in ScoreCapPolicy:
            config = ThresholdConfig.for_policy(cap_policy)
            for ratio in (0.0, 0.59, 0.6, 0.8, 0.95, 1.0):
                for fraud in (False, True):
                    holder = holder_factory(
                        on_time_ratio=ratio,
                        past_fraud_alerts=fraud,
                        active_investigation=fraud,
                    )
                    result = compute_trust_score(
                        holder, claims_factory(rejected=1), now=evaluated_at,
                        threshold_config=config,
                    )
                    assert 0 <= result.final_score <= cap_policy.max_score

    def test_to_dict_shape(self, holder_factory, evaluated_at):
        result = compute_trust_score(holder_factory(), [], now=evaluated_at)

        data = result.to_dict()

        assert data["final_score"] == 95
        assert data["category"] == "Highly Trusted"
        assert set(data["breakdown"]) == {
            "identity",
            "policy_health",
            "payment_behavior",
            "claim_behavior",
            "document_completeness",
            "fraud_penalties",
        }
        assert data["breakdown"]["identity"] == {
            "score": 20,
            "explanation": "Scored 20/20 for identity verification.",
        }


class TestInputValidation:
    """Malformed inputs are rejected before scoring."""

    @pytest.mark.parametrize("ratio", [-0.01, 1.01, float("nan")])
    def test_out_of_range_ratio_rejected(self, holder_factory, evaluated_at, ratio):
        holder = holder_factory(on_time_ratio=ratio)

        with pytest.raises(InvalidHolderInputError) as exc_info:
            compute_trust_score(holder, [], now=evaluated_at)

        assert "on_time_ratio" in str(exc_info.value)

    def test_error_is_a_value_error(self, holder_factory, evaluated_at):
        holder = holder_factory(on_time_ratio=2.0)

        with pytest.raises(ValueError):
            compute_trust_score(holder, [], now=evaluated_at)

    @pytest.mark.parametrize("ratio", [0.0, 1.0])
    def test_ratio_bounds_accepted(self, holder_factory, evaluated_at, ratio):
        result = compute_trust_score(
            holder_factory(on_time_ratio=ratio), [], now=evaluated_at
        )

        assert result.final_score >= 0

    @pytest.mark.parametrize(
        "field_name,value",
        [("missed_payments", -1), ("consistency_duration", -3)],
    )
    def test_negative_payment_counts_rejected(
        self, holder_factory, evaluated_at, field_name, value
    ):
        holder = holder_factory()
        payments = replace(holder.payment_history, **{field_name: value})
        holder = replace(holder, payment_history=payments)

        with pytest.raises(InvalidHolderInputError) as exc_info:
            compute_trust_score(holder, [], now=evaluated_at)

        assert exc_info.value.errors == [
            f"{field_name} cannot be negative, got {value}"
        ]

    def test_unknown_claim_status_rejected(self, holder_factory, evaluated_at):
        claims = [
            ClaimRecord(claim_id="CLM-1", status=ClaimStatus.APPROVED),
            ClaimRecord(claim_id="CLM-2", status="Lost"),
        ]

        with pytest.raises(InvalidHolderInputError) as exc_info:
            compute_trust_score(holder_factory(), claims, now=evaluated_at)

        assert exc_info.value.errors == ["Claim CLM-2 has unknown status 'Lost'"]

    def test_all_errors_reported_together(self, holder_factory):
        holder = holder_factory(on_time_ratio=1.2)
        holder = replace(
            holder, payment_history=replace(holder.payment_history, missed_payments=-2)
        )
        claims = [ClaimRecord(claim_id="CLM-9", status="Unknown")]

        with pytest.raises(InvalidHolderInputError) as exc_info:
            validate_holder_inputs(holder, claims)

        assert len(exc_info.value.errors) == 3

    def test_valid_inputs_pass(self, holder_factory, claims_factory):
        validate_holder_inputs(holder_factory(), claims_factory(rejected=1, approved=2))
