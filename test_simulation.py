"""설정 로드 + 월간 드라이버 통합 테스트"""

import json
from pathlib import Path

import pytest

from lender_abm.__main__ import main
from lender_abm.config.loader import load_scenario, load_scenario_from_dict
from lender_abm.config.schema import PolicyEvent
from lender_abm.core.errors import ConfigError
from lender_abm.core.events import EventBus
from lender_abm.institutions.policy_timeline import PolicyTimeline
from lender_abm.simulation.engine import SimulationEngine

PRESET_DIR = Path(__file__).parent / "src" / "lender_abm" / "presets" / "uk_baseline"


def _small_engine(n=500, **overrides) -> SimulationEngine:
    config = load_scenario(PRESET_DIR)
    config.simulation.num_households = n
    config.institutions.policy_timeline = overrides.get('timeline', [])
    return SimulationEngine(config)


def test_load_preset():
    config = load_scenario(PRESET_DIR)

    assert config.simulation.name == "uk_baseline"
    assert config.institutions.bank.max_ftb_ltv == 0.95
    assert config.institutions.bank.n_payments == 300
    assert config.institutions.central_bank.max_fraction_oo_over_lti == 0.15
    assert len(config.institutions.policy_timeline) == 2


def test_invalid_config_raises_config_error(tmp_path):
    with pytest.raises(ConfigError):
        load_scenario_from_dict({"institutions": {"bank": {"max_ftb_ltv": "lots"}}})
    with pytest.raises(ConfigError):
        load_scenario(tmp_path / "missing")

    (tmp_path / "scenario.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_scenario(tmp_path)


def test_short_run_keeps_rate_above_base():
    engine = _small_engine()
    summary = engine.run(n_steps=6, progress=False)

    assert summary['months'] == 6
    assert summary['total_approvals'] > 0
    for s in engine.recorder.history:
        assert s.mortgage_rate >= s.base_rate - 1e-12
        assert s.n_oo_over_lti <= s.n_oo_mortgages
    assert len(engine.bank.mortgages) == summary['final_outstanding_mortgages']


def test_borrowers_never_overdraw():
    engine = _small_engine()
    engine.run(n_steps=4, progress=False)

    assert all(h.bank_balance >= 0.0 for h in engine.population)


def test_policy_timeline_applies_scheduled_changes():
    timeline = [
        PolicyEvent(month=1, type="set_base_rate", params={"rate": 0.01}),
        PolicyEvent(month=1, type="set_bank_ltv", params={"ftb": 0.9}),
        PolicyEvent(month=2, type="set_central_bank_lti", params={"ftb": 4.0, "oo": 4.0}),
        PolicyEvent(month=2, type="set_max_fraction_over_lti", params={"fraction": 0.1}),
        PolicyEvent(month=2, type="set_icr_limit", params={"icr": 1.45}),
    ]
    engine = _small_engine(n=200, timeline=timeline)
    engine.initialize()

    engine.step()
    assert engine.central_bank.base_rate == 0.005
    engine.step()
    assert engine.central_bank.base_rate == 0.01
    assert engine.bank.policy.ftb_ltv == 0.9
    engine.step()
    assert engine.central_bank.get_loan_to_income_limit(True, True) == 4.0
    assert engine.central_bank.get_max_fraction_oo_mortgages_over_lti_limit() == 0.1
    assert engine.central_bank.get_interest_cover_ratio_limit(False) == 1.45


def test_same_seed_same_result():
    a = _small_engine(n=300).run(n_steps=3, progress=False)
    b = _small_engine(n=300).run(n_steps=3, progress=False)

    assert a == b


def test_cli_quiet_prints_json_summary(capsys):
    code = main(["--households", "200", "--steps", "3", "--quiet"])

    out = capsys.readouterr().out
    assert code == 0
    summary = json.loads(out[out.index("{"):])
    assert summary['months'] == 3


def test_cli_missing_preset(capsys):
    code = main(["--preset", "does_not_exist"])

    assert code == 1
    assert "Error" in capsys.readouterr().out


def test_unknown_policy_type_rejected():
    with pytest.raises(ConfigError):
        load_scenario_from_dict({"institutions": {"policy_timeline": [
            {"month": 3, "type": "set_reserve_ratio", "params": {"ratio": 0.1}},
        ]}})


def test_timeline_publishes_once_in_schedule_order():
    bus = EventBus()
    seen = []
    bus.subscribe("*", lambda change: seen.append((change.month, change.name)))
    timeline = PolicyTimeline([
        PolicyEvent(month=2, type="set_bank_lti", params={"ftb": 5.0}),
        PolicyEvent(month=0, type="set_base_rate", params={"rate": 0.01}),
        PolicyEvent(month=2, type="set_icr_limit", params={"icr": 1.5}),
    ], bus)

    assert timeline.check(0) == 1
    assert bus.pending == 1
    assert timeline.check(0) == 0
    bus.process()
    assert timeline.check(5) == 2
    bus.process()

    assert seen == [(0, "set_base_rate"), (5, "set_bank_lti"), (5, "set_icr_limit")]
    assert len(bus.applied) == 3
    assert timeline.upcoming == []


def test_same_seed_same_terminations():
    def run_once():
        engine = _small_engine(n=1000)
        engine.config.agents.mortgage_termination_rate = 0.3
        engine.run(n_steps=6, progress=False)
        return (
            [(m.borrower.id, m.principal) for m in engine.bank.mortgages],
            [h.n_mortgages for h in engine.population],
            engine.recorder.get_summary(),
        )

    first = run_once()
    second = run_once()

    assert len(first[0]) > 0
    assert first == second


@pytest.mark.parametrize("low, high", [
    (1.0, 1.2),     # 최대가격 초과 요청
    (0.9, 0.6),     # 범위 역전
    (0.0, 1.0),
])
def test_invalid_price_range_rejected_at_load(low, high):
    with pytest.raises(ConfigError):
        load_scenario_from_dict({"agents": {"price_to_max_low": low, "price_to_max_high": high}})
