"""SmartComps SDK - compensation comparison, offer recommendation and advisories."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    get_effective_settings,
    get_tax_table,
    load_scenario,
    scenario_from_dict,
    save_scenario,
    Settings,
    SETTING_KEYS,
    ScenarioNotFoundError,
    ScenarioError,
)

from .schemas import (
    CompensationRecord,
    Competitor,
    CompetitorSet,
    SocialSecurityProfile,
    BankFlowEntry,
    BankFlowSeries,
    AdviseParams,
    CandidateInfo,
    PackageAggregate,
    CompetitorBenchmark,
    Suggestion,
    Advisory,
    IncreaseStats,
    DeductionBreakdown,
    FlowStats,
    FlowReconciliation,
    Analysis,
)

from .comp import (
    aggregate,
    derive_stock_value,
    sync_stock_value,
    set_bonus_amount,
    set_bonus_months,
    bonus_months_display,
    benchmark,
    add_competitor,
    update_competitor,
    remove_competitor,
    recommend,
    round_suggestion,
    advise,
    calc_increase_stats,
)

from .taxes import (
    TaxTable,
    TaxTableError,
    load_tax_table,
    get_default_tax_table,
    calc_deductions,
    calc_monthly_tax,
    net_from_gross,
    solve_gross_from_net,
    estimate_pre_tax,
)

from .flows import flow_stats, reconcile_bank_flows

from .formatting import (
    safe_parse,
    round_currency,
    round_to_step,
    format_currency,
    format_percent,
    format_delta,
)

from . import session
from .session import SessionState, evaluate

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "get_effective_settings",
    "get_tax_table",
    "load_scenario",
    "scenario_from_dict",
    "save_scenario",
    "Settings",
    "SETTING_KEYS",
    "ScenarioNotFoundError",
    "ScenarioError",
    # Schemas
    "CompensationRecord",
    "Competitor",
    "CompetitorSet",
    "SocialSecurityProfile",
    "BankFlowEntry",
    "BankFlowSeries",
    "AdviseParams",
    "CandidateInfo",
    "PackageAggregate",
    "CompetitorBenchmark",
    "Suggestion",
    "Advisory",
    "IncreaseStats",
    "DeductionBreakdown",
    "FlowStats",
    "FlowReconciliation",
    "Analysis",
    # Compensation
    "aggregate",
    "derive_stock_value",
    "sync_stock_value",
    "set_bonus_amount",
    "set_bonus_months",
    "bonus_months_display",
    "benchmark",
    "add_competitor",
    "update_competitor",
    "remove_competitor",
    "recommend",
    "round_suggestion",
    "advise",
    "calc_increase_stats",
    # Taxes
    "TaxTable",
    "TaxTableError",
    "load_tax_table",
    "get_default_tax_table",
    "calc_deductions",
    "calc_monthly_tax",
    "net_from_gross",
    "solve_gross_from_net",
    "estimate_pre_tax",
    # Bank flows
    "flow_stats",
    "reconcile_bank_flows",
    # Formatting
    "safe_parse",
    "round_currency",
    "round_to_step",
    "format_currency",
    "format_percent",
    "format_delta",
    # Session
    "session",
    "SessionState",
    "evaluate",
]
