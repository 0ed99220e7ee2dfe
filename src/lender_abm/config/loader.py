"""JSON → Python 설정 로더"""

import json
from pathlib import Path

from pydantic import ValidationError

from .schema import ScenarioConfig
from ..core.errors import ConfigError


def _read_json(path: Path) -> dict:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e


def load_scenario(preset_dir: str | Path) -> ScenarioConfig:
    """프리셋 디렉토리에서 시나리오 로드

    Args:
        preset_dir: 프리셋 디렉토리 경로 (scenario.json이 있는 곳)

    Returns:
        통합된 ScenarioConfig
    """
    preset_dir = Path(preset_dir)
    if not preset_dir.is_dir():
        raise ConfigError(f"Preset directory not found: {preset_dir}")

    # 1. scenario.json (마스터 설정)
    scenario_path = preset_dir / "scenario.json"
    scenario_data = _read_json(scenario_path) if scenario_path.exists() else {}

    # 2. institutions.json (은행/중앙은행/임대시장)
    inst_path = preset_dir / "institutions.json"
    if inst_path.exists():
        scenario_data.setdefault("institutions", {}).update(_read_json(inst_path))

    # 3. agents.json (가구 구성)
    agents_path = preset_dir / "agents.json"
    if agents_path.exists():
        scenario_data.setdefault("agents", {}).update(_read_json(agents_path))

    return load_scenario_from_dict(scenario_data)


def load_scenario_from_dict(data: dict) -> ScenarioConfig:
    """딕셔너리에서 직접 로드"""
    try:
        return ScenarioConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid scenario configuration: {e}") from e
