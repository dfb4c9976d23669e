"""Pipeline configuration loading."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

CONFIG_DIR = Path(__file__).resolve().parents[2] / "configs"

DEFAULT_DATE_PROMPT = (
    "다음 텍스트에서 날짜가 여러개 있으면 앞에 것만 선택해서 한 날짜만 남게 해주고, "
    "'yyyy년 mm월 dd일 hh시 mm분' 포맷으로 수정해주세요. "
    "예를 들어 '2025년 01월 04일 오후 3시 25분2025년 01월 04일 오후 4시 08분' "
    "이런식으로 있다면 '2025년 01월 04일 오후 3시 25분'만 남게 해주세요."
)


@dataclass
class ServiceConfig:
    url: str
    timeout: float


@dataclass
class TransformConfig:
    content_prompts: list[str] = field(default_factory=list)
    date_prompt: str = DEFAULT_DATE_PROMPT
    chain_content_stages: bool = False


@dataclass
class StorageConfig:
    bucket: str
    region: str = "ap-northeast-2"
    endpoint_url: str | None = None
    prefix: str = "news"
    timeout: float = 30.0


@dataclass
class GitHubConfig:
    token: str
    owner: str
    repo: str
    branch: str = "main"
    api_url: str = "https://api.github.com"
    timeout: float = 30.0


@dataclass
class PublishConfig:
    max_attempts: int = 1
    commit_message: str = "Add: 오늘의 기사 추가({date})"


@dataclass
class PipelineConfig:
    categories: dict[str, str]
    extract: ServiceConfig
    clean: ServiceConfig
    storage: StorageConfig
    github: GitHubConfig
    transform: TransformConfig = field(default_factory=TransformConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)
    timezone: str = "UTC"
    http_retries: int = 0
    max_category_workers: int | None = None
    max_article_workers: int | None = None


def find_config_path(
    config_name: str | None,
    config_dir: Path = CONFIG_DIR,
    default_name: str = "prod",
    env_var: str | None = "CONFIG_ENV",
) -> Path:
    """Find config file path, checking env var and defaults.

    Args:
        config_name: Name of config (without .yaml), a path to a YAML file,
            or None for default
        config_dir: Directory containing config files
        default_name: Default config name if config_name is None
        env_var: Environment variable to check for config name

    Returns:
        Path to the config file

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    if config_name is None:
        config_name = os.environ.get(env_var, default_name) if env_var else default_name

    if config_name.endswith((".yaml", ".yml")):
        config_path = Path(config_name)
    else:
        config_path = config_dir / f"{config_name}.yaml"

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    return config_path


def load_yaml(path: Path) -> dict:
    """Load YAML file and return dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _require(env: Mapping[str, str], name: str) -> str:
    value = env.get(name, "").strip()
    if not value:
        raise ValueError(f"Missing required environment variable: {name}")
    return value


def _check_timezone(name: str) -> str:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name}") from e
    return name


def parse_config(data: dict, env: Mapping[str, str]) -> PipelineConfig:
    """Build a PipelineConfig from parsed YAML and an environment mapping.

    Secrets and deployment URLs come from ``env``; everything else from
    ``data``.

    Raises:
        ValueError: If a required environment variable is missing, the
            category mapping is empty or the timezone is unknown.
    """
    categories = {str(k): str(v) for k, v in (data.get("categories") or {}).items()}
    if not categories:
        raise ValueError("Config must define at least one category")

    timeouts = data.get("timeouts") or {}
    transform_data = data.get("transform") or {}
    storage_data = data.get("storage") or {}
    github_data = data.get("github") or {}
    publish_data = data.get("publish") or {}
    workers = data.get("workers") or {}

    transform = TransformConfig(
        content_prompts=list(transform_data.get("content_prompts", [])),
        date_prompt=transform_data.get("date_prompt", DEFAULT_DATE_PROMPT),
        chain_content_stages=bool(transform_data.get("chain_content_stages", False)),
    )

    storage = StorageConfig(
        bucket=_require(env, "S3_BUCKET_NAME"),
        region=env.get("AWS_REGION") or storage_data.get("region", "ap-northeast-2"),
        endpoint_url=env.get("S3_ENDPOINT") or None,
        prefix=storage_data.get("prefix", "news"),
        timeout=float(timeouts.get("storage", 30)),
    )

    github = GitHubConfig(
        token=_require(env, "GITHUB_TOKEN"),
        owner=_require(env, "GITHUB_OWNER"),
        repo=_require(env, "GITHUB_REPO"),
        branch=env.get("GITHUB_BRANCH") or github_data.get("branch", "main"),
        api_url=github_data.get("api_url", "https://api.github.com"),
        timeout=float(timeouts.get("github", 30)),
    )

    publish = PublishConfig(
        max_attempts=int(publish_data.get("max_attempts", 1)),
        commit_message=publish_data.get("commit_message", PublishConfig.commit_message),
    )

    return PipelineConfig(
        categories=categories,
        extract=ServiceConfig(
            url=_require(env, "EXTRACT_SERVER_URL"),
            timeout=float(timeouts.get("extract", 120)),
        ),
        clean=ServiceConfig(
            url=_require(env, "CLEAN_SERVER_URL"),
            timeout=float(timeouts.get("clean", 10)),
        ),
        storage=storage,
        github=github,
        transform=transform,
        publish=publish,
        timezone=_check_timezone(data.get("timezone") or "UTC"),
        http_retries=int(data.get("http_retries", 0)),
        max_category_workers=workers.get("categories"),
        max_article_workers=workers.get("articles"),
    )


def load_config(config_name: str | None = None, env: Mapping[str, str] | None = None) -> PipelineConfig:
    """Load configuration from a YAML file plus the process environment.

    Args:
        config_name: Name of config file (without .yaml extension) or a path.
                    If None, uses CONFIG_ENV env var or "prod".
        env: Environment mapping (defaults to os.environ)

    Returns:
        Loaded PipelineConfig object
    """
    path = find_config_path(config_name)
    return parse_config(load_yaml(path), os.environ if env is None else env)
