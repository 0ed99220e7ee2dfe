"""CLI 엔트리 포인트

사용법:
    python -m lender_abm --preset uk_baseline --steps 24
    python -m lender_abm --preset-dir ./my_preset --households 5000 --quiet
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import numpy as np

from .core.errors import ConfigError
from .simulation.engine import SimulationEngine


class NumpyEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, (np.integer,)):
            return int(obj)
        if isinstance(obj, (np.floating,)):
            return float(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


def main(argv=None):
    parser = argparse.ArgumentParser(description="주택담보대출 은행 ABM 시뮬레이션")
    parser.add_argument("--preset", type=str, default="uk_baseline",
                        help="프리셋 이름 (uk_baseline)")
    parser.add_argument("--preset-dir", type=str, default=None,
                        help="프리셋 디렉토리 직접 지정")
    parser.add_argument("--steps", type=int, default=None,
                        help="시뮬레이션 스텝 수 (개월)")
    parser.add_argument("--households", type=int, default=None,
                        help="가구 수 (기본: 프리셋에서 로드)")
    parser.add_argument("--seed", type=int, default=None,
                        help="랜덤 시드")
    parser.add_argument("--quiet", action="store_true",
                        help="진행 출력 끄고 JSON 요약만 출력")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="로그 레벨")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # 프리셋 디렉토리 결정
    if args.preset_dir:
        preset_dir = Path(args.preset_dir)
    else:
        preset_dir = Path(__file__).parent / "presets" / args.preset

    try:
        engine = SimulationEngine.from_preset(preset_dir)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    # CLI 인자로 오버라이드 (엔진을 다시 만들어 인구 크기/시드 반영)
    cfg = engine.config
    if args.households is not None or args.seed is not None:
        if args.households is not None:
            cfg.simulation.num_households = args.households
        if args.seed is not None:
            cfg.simulation.seed = args.seed
        engine = SimulationEngine(cfg)

    summary = engine.run(n_steps=args.steps, progress=not args.quiet)

    if args.quiet:
        print(json.dumps(summary, indent=2, ensure_ascii=False, cls=NumpyEncoder))
    return 0


if __name__ == "__main__":
    sys.exit(main())
