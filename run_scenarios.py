"""대출 정책 시나리오 비교 + 보고서 생성

lender_abm 사용. 4개 시나리오를 실행하고 종합 보고서를 출력.
"""

import sys
import time
import json
import numpy as np
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from lender_abm.config.loader import load_scenario
from lender_abm.simulation.engine import SimulationEngine


def run_scenario(name, config, n_steps=60, seed=42):
    """시나리오 실행 + 월별 결과 수집"""
    config.simulation.seed = seed
    engine = SimulationEngine(config)

    start = time.time()
    engine.initialize()

    monthly_data = []
    for step in range(n_steps):
        engine.step()
        s = engine.recorder.history[-1]
        monthly_data.append({
            'month': step + 1,
            'mortgage_rate': s.mortgage_rate,
            'base_rate': s.base_rate,
            'supply_val': s.supply_val,
            'supply_target': s.supply_target,
            'approvals': s.n_approved,
            'oo_over_lti': s.n_oo_over_lti,
            'oo_mortgages': s.n_oo_mortgages,
            'oo_lti_mean_above_median': s.oo_lti_mean_above_median,
            'rejections': engine.month_rejections,
        })

    elapsed = time.time() - start
    return {
        'name': name,
        'n_steps': n_steps,
        'n_households': engine.population.n,
        'elapsed_sec': round(elapsed, 1),
        'summary': engine.recorder.get_summary(),
        'monthly': monthly_data,
    }


def print_scenario_result(result):
    """시나리오 결과 간략 출력"""
    s = result['summary']
    print(f"    승인: {s['total_approvals']:,}건 | 최종금리: {s['final_mortgage_rate']:.2%} | "
          f"소요: {result['elapsed_sec']}초")


def generate_report(results):
    """종합 보고서 생성"""
    lines = []
    L = lines.append

    L("=" * 80)
    L("     주택담보대출 은행 ABM 시나리오 분석 보고서")
    L("=" * 80)

    L("\n\n1. 실험 개요")
    L("-" * 70)
    L(f"  시뮬레이션 기간: {results[0]['n_steps']}개월")
    L(f"  가구 수: {results[0]['n_households']:,}")

    L("\n\n2. 핵심 지표 비교")
    L("-" * 70)
    L(f"  {'시나리오':<24s} {'승인':>8s} {'신규대출':>14s} {'LTI초과':>8s} {'최종금리':>8s} {'목표대비':>8s}")
    L("  " + "-" * 72)
    for r in results:
        s = r['summary']
        L(f"  {r['name']:<24s} {s['total_approvals']:>8,} {s['total_new_credit']:>14,.0f} "
          f"{s['total_oo_over_lti']:>8,} {s['final_mortgage_rate']:>7.2%} {s['mean_supply_to_target']:>7.2f}x")

    L("\n\n3. 시나리오별 금리 추이 (6개월 간격)")
    L("=" * 70)
    for r in results:
        L(f"\n  [{r['name']}]")
        L(f"  {'월':>4s} {'금리':>7s} {'기준':>7s} {'승인':>6s} {'거절':>6s} {'LTI초과':>8s}")
        L("  " + "-" * 45)
        for m in r['monthly']:
            if m['month'] % 6 == 0 or m['month'] == 1:
                L(f"  {m['month']:>4d} "
                  f"{m['mortgage_rate']:>6.2%} "
                  f"{m['base_rate']:>6.2%} "
                  f"{m['approvals']:>6d} "
                  f"{m['rejections']:>6d} "
                  f"{m['oo_over_lti']:>4d}/{m['oo_mortgages']:<4d}")

    L("\n\n4. 기준 시나리오 대비 변화")
    L("-" * 70)
    base = results[0]['summary']
    for r in results[1:]:
        s = r['summary']
        diff = s['total_approvals'] - base['total_approvals']
        L(f"\n  [{r['name']}] vs 기준:")
        L(f"    승인건수 변화: {diff:>+,}건 ({diff / max(base['total_approvals'], 1) * 100:+.1f}%)")
        L(f"    최종금리 차이: {(s['final_mortgage_rate'] - base['final_mortgage_rate']) * 100:>+.2f}%p")

    L("=" * 80)
    return "\n".join(lines)


def main():
    preset_dir = Path(__file__).parent / "src" / "lender_abm" / "presets" / "uk_baseline"
    base_config = load_scenario(preset_dir)
    base_config.institutions.policy_timeline = []

    NUM_HOUSEHOLDS = 5000
    N_STEPS = 60

    results = []

    print("\n[1/4] 기준 시나리오...")
    cfg1 = base_config.model_copy(deep=True)
    cfg1.simulation.num_households = NUM_HOUSEHOLDS
    r1 = run_scenario("1. 기준", cfg1, N_STEPS)
    print_scenario_result(r1)
    results.append(r1)

    print("[2/4] 규제 LTI 강화...")
    cfg2 = base_config.model_copy(deep=True)
    cfg2.simulation.num_households = NUM_HOUSEHOLDS
    cfg2.institutions.central_bank.max_ftb_lti = 3.5
    cfg2.institutions.central_bank.max_oo_lti = 3.5
    cfg2.institutions.central_bank.max_fraction_oo_over_lti = 0.05
    r2 = run_scenario("2. LTI강화 (3.5x, 5%)", cfg2, N_STEPS)
    print_scenario_result(r2)
    results.append(r2)

    print("[3/4] 기준금리 인상...")
    cfg3 = base_config.model_copy(deep=True)
    cfg3.simulation.num_households = NUM_HOUSEHOLDS
    cfg3.institutions.central_bank.base_rate = 0.03
    cfg3.institutions.bank.initial_rate = 0.055
    r3 = run_scenario("3. 기준금리 3%", cfg3, N_STEPS)
    print_scenario_result(r3)
    results.append(r3)

    print("[4/4] LTV 완화...")
    cfg4 = base_config.model_copy(deep=True)
    cfg4.simulation.num_households = NUM_HOUSEHOLDS
    cfg4.institutions.bank.max_oo_ltv = 0.95
    cfg4.institutions.bank.max_btl_ltv = 0.85
    r4 = run_scenario("4. LTV완화", cfg4, N_STEPS)
    print_scenario_result(r4)
    results.append(r4)

    print("\n보고서 생성 중...")
    report = generate_report(results)

    report_path = Path(__file__).parent / "scenario_report.txt"
    with open(report_path, 'w', encoding='utf-8') as f:
        f.write(report)
    print(f"보고서 저장: {report_path}")

    data_path = Path(__file__).parent / "scenario_data.json"
    with open(data_path, 'w', encoding='utf-8') as f:
        json.dump(results, f, indent=2, ensure_ascii=False, default=_to_builtin)
    print(f"데이터 저장: {data_path}")

    print("\n\n")
    print(report)


def _to_builtin(obj):
    if isinstance(obj, np.generic):
        return obj.item()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


if __name__ == "__main__":
    main()
