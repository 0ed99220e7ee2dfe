"""시뮬레이션 엔진 - 은행/중앙은행/가구/통계 통합 (월간 드라이버)"""

import logging
import math
from dataclasses import asdict
from pathlib import Path

import numpy as np

from ..config.loader import load_scenario
from ..config.schema import ScenarioConfig
from ..core.events import EventBus
from ..agents.population import HouseholdPopulation
from ..collectors.credit_supply import CreditSupply
from ..collectors.core_indicators import CoreIndicators
from ..institutions.central_bank import CentralBank
from ..institutions.policy_timeline import PolicyTimeline
from ..lending.bank import Bank
from ..markets.rental_market import RentalMarketStats
from .phases import Phase, DEFAULT_PHASE_ORDER
from .recorder import Recorder

logger = logging.getLogger(__name__)


class SimulationEngine:
    """대출 시장 ABM 엔진"""

    def __init__(self, config: ScenarioConfig):
        self.config = config
        self.rng = np.random.default_rng(config.simulation.seed)
        self.current_month = 0

        inst = config.institutions

        # Policy change queue
        self.event_bus = EventBus()

        # Institutions
        self.central_bank = CentralBank(inst.central_bank)
        self.rental_stats = RentalMarketStats(inst.rental)
        self.credit_supply = CreditSupply()
        self.bank = Bank(inst.bank, self.central_bank, self.rental_stats, self.credit_supply)
        self.policy_timeline = PolicyTimeline(inst.policy_timeline, self.event_bus)

        # Households
        self.population = HouseholdPopulation(config.agents, config.simulation.num_households)

        # Stats
        self.indicators = CoreIndicators(
            self.credit_supply, self.bank,
            config.simulation.num_households,
            config.simulation.reference_households,
        )
        self.recorder = Recorder()
        self._month_counters = asdict(self.bank.counters)
        self.month_rejections = 0

        # Phase order
        self.phase_order = DEFAULT_PHASE_ORDER

        # Policy event handlers
        self._register_policy_handlers()

    def _register_policy_handlers(self):
        """정책 이벤트 핸들러 등록"""
        cb = self.central_bank
        bank = self.bank

        def handle_base_rate(event):
            if 'rate' in event.data:
                cb.set_base_rate(float(event.data['rate']))
                # 스프레드 유지, 상환계수만 새 금리로
                bank.rates.recalculate_monthly_payment_factor()

        def handle_central_bank_lti(event):
            cb.set_loan_to_income_limits(
                ftb=_opt_float(event.data, 'ftb'), oo=_opt_float(event.data, 'oo'),
            )

        def handle_bank_ltv(event):
            bank.policy.set_ltv_limits(
                ftb=_opt_float(event.data, 'ftb'),
                oo=_opt_float(event.data, 'oo'),
                btl=_opt_float(event.data, 'btl'),
            )

        def handle_bank_lti(event):
            bank.policy.set_lti_limits(
                ftb=_opt_float(event.data, 'ftb'), oo=_opt_float(event.data, 'oo'),
            )

        def handle_icr_limit(event):
            if 'icr' in event.data:
                cb.set_interest_cover_ratio_limit(float(event.data['icr']))

        def handle_max_fraction(event):
            if 'fraction' in event.data:
                cb.set_max_fraction_oo_over_lti(float(event.data['fraction']))

        def log_policy(change):
            logger.info("month %d: %s %s", change.month, change.name, change.data)

        self.event_bus.subscribe("policy.set_base_rate", handle_base_rate)
        self.event_bus.subscribe("policy.set_central_bank_lti", handle_central_bank_lti)
        self.event_bus.subscribe("policy.set_bank_ltv", handle_bank_ltv)
        self.event_bus.subscribe("policy.set_bank_lti", handle_bank_lti)
        self.event_bus.subscribe("policy.set_icr_limit", handle_icr_limit)
        self.event_bus.subscribe("policy.set_max_fraction_over_lti", handle_max_fraction)
        self.event_bus.subscribe("*", log_policy)

    @classmethod
    def from_preset(cls, preset_dir: str | Path) -> 'SimulationEngine':
        """프리셋 디렉토리에서 생성"""
        return cls(load_scenario(preset_dir))

    def initialize(self):
        """시뮬레이션 초기화 (중앙은행 → 은행 순서)"""
        self.central_bank.reset()
        self.rental_stats.reset()
        self.credit_supply.reset()
        self.bank.init()
        self.population.initialize(self.rng)
        self._month_counters = asdict(self.bank.counters)

        print(f"  Initialized: {len(self.population):,} households, "
              f"mortgage rate {self.bank.mortgage_interest_rate:.2%}")

    def step(self):
        """한 달 시뮬레이션"""
        for phase in self.phase_order:
            self._execute_phase(phase)
        self.current_month += 1

    def _execute_phase(self, phase: Phase):
        """개별 페이즈 실행"""
        if phase == Phase.POLICY_CHECK:
            self.policy_timeline.check(self.current_month)

        elif phase == Phase.EVENT_PROCESS:
            self.event_bus.process()

        elif phase == Phase.BANK_STEP:
            self.bank.step(len(self.population))

        elif phase == Phase.RENTAL_UPDATE:
            self.rental_stats.step(self.rng)

        elif phase == Phase.INCOME_DISTRIBUTION:
            self.population.distribute_income()

        elif phase == Phase.MORTGAGE_DEMAND:
            self.month_rejections = self._process_mortgage_demand()
            self._month_counters = asdict(self.bank.counters)

        elif phase == Phase.MORTGAGE_TERMINATION:
            self._terminate_mortgages()

        elif phase == Phase.CREDIT_STATS:
            self.credit_supply.step(self.bank.mortgages)

        elif phase == Phase.RECORD_STATS:
            self.recorder.record(
                self.current_month, self.bank, self.credit_supply, self.indicators,
                self.population, self.rental_stats, self._month_counters,
            )

    def _process_mortgage_demand(self) -> int:
        """신청 가구 순서대로 심사 → 실행. 거절(원금 0) 건수 반환

        심사는 반드시 순차: 규제 LTI 상한이 같은 달 앞선 실행 결과에 의존한다.
        """
        cfg = self.config.agents
        bank = self.bank
        rng = self.rng
        rejections = 0

        for h in self.population.sample_applicants(rng):
            is_home = not h.is_investor
            max_price = bank.get_max_mortgage_price(h, is_home)
            if max_price <= 0.0 or not math.isfinite(max_price):
                rejections += 1
                continue

            price = max_price * rng.uniform(cfg.price_to_max_low, cfg.price_to_max_high)
            if price <= 0.0:
                rejections += 1
                continue
            desired = h.bank_balance * float(np.clip(rng.normal(cfg.down_payment_ratio_mean, 0.1), 0, 1))

            approval = bank.request_approval(h, price, desired, is_home)
            if approval.is_void:
                rejections += 1
                continue

            bank.commit(approval)
            h.bank_balance -= approval.down_payment
            h.n_mortgages += 1
            if is_home:
                h.is_first_time_buyer = False

        return rejections

    def _terminate_mortgages(self) -> int:
        """매도/완제로 끝나는 계약 제거"""
        rate = self.config.agents.mortgage_termination_rate
        ended = 0
        for mortgage in self.bank.mortgages:
            if self.rng.random() < rate:
                if self.bank.end_mortgage_contract(mortgage):
                    mortgage.borrower.n_mortgages -= 1
                    ended += 1
        return ended

    def run(self, n_steps: int = None, progress: bool = True) -> dict:
        """시뮬레이션 실행

        Args:
            n_steps: 실행할 스텝 수 (None이면 config 기준)
            progress: 진행 상황 출력
        """
        if n_steps is None:
            n_steps = self.config.simulation.num_steps

        if progress:
            print(f"Starting simulation: {n_steps} months, {self.population.n:,} households")

        self.initialize()

        for step in range(n_steps):
            self.step()
            if progress and (step + 1) % 6 == 0:
                s = self.recorder.history[-1]
                print(f"  Month {step+1:3d}/{n_steps}: rate={s.mortgage_rate:.3%} "
                      f"supply/target={s.supply_val:,.0f}/{s.supply_target:,.0f} "
                      f"approvals={s.n_approved} over_lti={s.n_oo_over_lti}/{s.n_oo_mortgages}")

        summary = self.recorder.get_summary()
        if progress and summary:
            print(f"\nSimulation complete. {n_steps} months elapsed.")
            print(f"  Mortgage rate: {summary['initial_mortgage_rate']:.3%} -> {summary['final_mortgage_rate']:.3%}")
            print(f"  Total approvals: {summary['total_approvals']:,}")
            print(f"  Outstanding mortgages: {summary['final_outstanding_mortgages']:,}")

        return summary

    def reset(self):
        """초기화"""
        self.current_month = 0
        self.rng = np.random.default_rng(self.config.simulation.seed)
        self.policy_timeline.reset()
        self.event_bus.clear()
        self._register_policy_handlers()
        self.recorder.reset()


def _opt_float(data: dict, key: str):
    return float(data[key]) if key in data else None
