"""Tests for session state transitions and evaluation."""

import pytest
from pydantic import ValidationError

from smartcomps.sdk import Settings, SessionState, evaluate, session


@pytest.fixture
def state():
    return SessionState.default()


class TestDefaultSession:

    def test_default_packages(self, state):
        analysis = evaluate(state)

        assert analysis.current.cash_total == 232096
        assert analysis.offer.total_package == 340000
        assert state.current.bonus_months == pytest.approx(15360 / 16672)
        assert state.offer.bonus_months == pytest.approx(3.0)

    def test_default_analysis(self, state):
        analysis = evaluate(state)

        assert [t.code for t in analysis.advisories] == ["balanced"]
        assert analysis.suggestion.total == pytest.approx(232096 * 1.3)
        assert analysis.reconciliation.status == "no_data"
        assert analysis.estimated_pre_tax_flat == 0
        assert analysis.deductions.total == pytest.approx(3500)


class TestTransitions:

    def test_transitions_return_new_state(self, state):
        updated = session.set_record_field(state, "offer", "base_monthly", 25000)

        assert updated.offer.base_monthly == 25000
        assert state.offer.base_monthly == 20000

    def test_base_edit_does_not_rescale_bonus(self, state):
        updated = session.set_record_field(state, "offer", "base_monthly", 30000)

        assert updated.offer.performance_bonus == 60000
        assert updated.offer.bonus_months == pytest.approx(3.0)

    def test_bonus_amount_updates_months(self, state):
        updated = session.set_bonus_amount(state, "current", 33344)
        assert updated.current.bonus_months == pytest.approx(2.0)

    def test_bonus_months_updates_amount(self, state):
        updated = session.set_bonus_months(state, "current", 3.33)
        assert updated.current.performance_bonus == 55518

    def test_equity_edit_rederives_stock(self, state):
        state = session.set_record_field(state, "offer", "grant_price", 50)
        state = session.set_record_field(state, "offer", "strike_price", 10)
        state = session.set_record_field(state, "offer", "stock_count", "4,000")

        assert state.offer.stock_value == 40000

    def test_direct_stock_value_edit(self, state):
        updated = session.set_record_field(state, "offer", "stock_value", 12345)
        assert updated.offer.stock_value == 12345

    def test_unknown_field(self, state):
        with pytest.raises(ValueError, match="Unknown compensation field"):
            session.set_record_field(state, "offer", "salary", 1)

    def test_unknown_party(self, state):
        with pytest.raises(ValueError, match="Unknown party"):
            session.set_record_field(state, "competitor", "base_monthly", 1)

    def test_apply_suggestion_rounds(self, state):
        analysis = evaluate(state)

        updated = session.apply_suggestion(state, "base_monthly", analysis.suggestion.base_monthly)

        assert updated.offer.base_monthly == 14000

    def test_competitor_lifecycle(self, state):
        state = session.add_competitor(state, "Alpha")
        state = session.update_competitor_field(state, 1, "base_monthly", 40000)
        assert evaluate(state).benchmark.max_competitor_id == 1

        state = session.remove_competitor(state, 1)
        assert state.competitors.entries == []
        assert state.competitors.next_id == 2

    def test_set_params(self, state):
        updated = session.set_params(state, target_increase_pct=0.5)

        assert updated.params.target_increase_pct == 0.5
        assert updated.params.stock_ratio == 0.15

    def test_social_security_and_candidate(self, state):
        state = session.set_social_security_field(state, "base_personal", "10,000")
        state = session.set_candidate_field(state, "level", 8)

        assert evaluate(state).deductions.total == pytest.approx(1750)
        assert state.candidate.level == "8"

    def test_bank_flows(self, state):
        state = session.set_bank_flow(state, 0, 8000)
        assert state.bank_flows.amounts[0] == 8000

        state = session.set_flow_type(state, "gross")
        assert state.bank_flows.flow_type == "gross"
        assert state.bank_flows.amounts[0] == 8000

    def test_bank_flow_index_out_of_range(self, state):
        with pytest.raises(IndexError):
            session.set_bank_flow(state, 12, 1000)


class TestFromDict:

    def test_camel_case_and_lenient_numbers(self):
        state = SessionState.from_dict({
            "current": {"baseMonthly": "16,672", "months": 13, "performanceBonus": 15360},
            "socialSecurity": {"basePersonal": 10000},
            "bankFlows": {"flowType": "gross", "entries": [20000] * 12},
        })

        assert state.current.base_monthly == 16672
        assert state.social_security.base_personal == 10000
        assert state.bank_flows.flow_type == "gross"

    def test_stock_value_derived_on_load(self):
        state = SessionState.from_dict({
            "offer": {"stock_value": 1, "stock_count": 4000, "grant_price": 50},
            "competitors": [{"name": "A", "record": {"stock_count": 100, "grant_price": 40}}],
        })

        assert state.offer.stock_value == 50000
        assert state.competitors.entries[0].record.stock_value == 1000

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            SessionState.from_dict({"current": {"base_salary": 1}})


class TestEvaluate:

    def test_net_flows(self, state):
        for month in range(12):
            state = session.set_bank_flow(state, month, 8000)

        analysis = evaluate(state)

        assert analysis.flow_stats.average == 8000
        assert analysis.estimated_gross_bisection == pytest.approx(11600, abs=2)
        assert analysis.estimated_pre_tax_flat == pytest.approx(8000 / 0.775)

    def test_gross_flows_pass_through(self, state):
        state = session.set_flow_type(state, "gross")
        state = session.set_bank_flow(state, 0, 30000)

        assert evaluate(state).estimated_gross_bisection == 30000

    def test_gross_flows_are_not_grossed_up_again(self, state):
        state = session.set_flow_type(state, "gross")
        for month in range(12):
            state = session.set_bank_flow(state, month, 17000)

        analysis = evaluate(state)

        assert analysis.estimated_pre_tax_flat == 17000
        assert analysis.estimated_gross_bisection == 17000
        assert "flow_mismatch" not in [t.code for t in analysis.advisories]

    def test_flow_mismatch_fires_from_flows(self, state):
        for month in range(12):
            state = session.set_bank_flow(state, month, 20000)

        codes = [t.code for t in evaluate(state).advisories]

        assert codes == ["flow_mismatch"]

    def test_monthly_inversion_follows_settings(self, state):
        state = session.set_record_field(state, "offer", "base_monthly", 15000)

        enabled = [t.code for t in evaluate(state).advisories]
        disabled = [t.code for t in evaluate(state, settings=Settings(check_monthly_inversion=False)).advisories]

        assert "monthly_inversion" in enabled
        assert "monthly_inversion" not in disabled
