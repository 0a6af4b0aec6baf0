"""Tests for bracket table loading and validation."""

import pytest
import yaml
from pydantic import ValidationError

from smartcomps.sdk.schemas import SocialSecurityProfile
from smartcomps.sdk.taxes import (
    TaxTable,
    TaxTableError,
    get_default_tax_table,
    load_tax_table,
    solve_gross_from_net,
    net_from_gross,
)


def write_table(path, data):
    path.write_text(yaml.dump(data))
    return path


class TestDefaultTable:

    def test_packaged_table(self):
        table = get_default_tax_table()

        assert table.threshold == 5000
        assert [b.rate for b in table.brackets] == [0.03, 0.10, 0.20, 0.25, 0.30, 0.35, 0.45]
        assert [b.quick_deduction for b in table.brackets] == [0, 210, 1410, 2660, 4410, 7160, 15160]
        assert table.brackets[-1].up_to is None

    def test_bracket_lookup_uses_first_upper_bound_at_or_above(self):
        table = get_default_tax_table()

        assert table.bracket_for(3000).rate == 0.03
        assert table.bracket_for(3000.01).rate == 0.10
        assert table.bracket_for(1_000_000).rate == 0.45


class TestValidation:

    def test_rejects_discontinuous_brackets(self):
        with pytest.raises(ValidationError, match="do not meet"):
            TaxTable.model_validate({
                "brackets": [
                    {"up_to": 3000, "rate": 0.03, "quick_deduction": 0},
                    {"rate": 0.10, "quick_deduction": 500},
                ]
            })

    def test_rejects_decreasing_rates(self):
        with pytest.raises(ValidationError, match="must not decrease"):
            TaxTable.model_validate({
                "brackets": [
                    {"up_to": 3000, "rate": 0.10, "quick_deduction": 0},
                    {"rate": 0.05, "quick_deduction": 0},
                ]
            })

    def test_rejects_unordered_bounds(self):
        with pytest.raises(ValidationError, match="must increase"):
            TaxTable.model_validate({
                "brackets": [
                    {"up_to": 12000, "rate": 0.03, "quick_deduction": 0},
                    {"up_to": 3000, "rate": 0.10, "quick_deduction": 840},
                    {"rate": 0.20, "quick_deduction": 1140},
                ]
            })

    def test_rejects_closed_top_bracket(self):
        with pytest.raises(ValidationError, match="open-ended"):
            TaxTable.model_validate({"brackets": [{"up_to": 3000, "rate": 0.03}]})


class TestLoadTaxTable:

    def test_custom_table_drives_solver(self, tmp_path):
        path = write_table(tmp_path / "flat.yaml", {
            "threshold": 0,
            "brackets": [{"rate": 0.10, "quick_deduction": 0}],
        })
        table = load_tax_table(path)
        profile = SocialSecurityProfile(base_personal=0)

        gross = solve_gross_from_net(9000, profile, table)

        assert abs(net_from_gross(gross, profile, table) - 9000) < 1
        assert gross == pytest.approx(10000, abs=2)

    def test_missing_file(self, tmp_path):
        with pytest.raises(TaxTableError, match="not found"):
            load_tax_table(tmp_path / "missing.yaml")

    def test_invalid_table_wrapped(self, tmp_path):
        path = write_table(tmp_path / "bad.yaml", {"brackets": [{"up_to": 100, "rate": 0.1}]})

        with pytest.raises(TaxTableError, match="Invalid tax table"):
            load_tax_table(path)
