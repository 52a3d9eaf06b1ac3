from __future__ import annotations

import json
import os
from pathlib import Path
from typing import ClassVar, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from feishu2html.converter.html_builder import TemplateMode
from feishu2html.services.errors import ConfigError

ENV_PREFIX = "FEISHU2HTML_"


class ExportConfig(BaseModel):
    app_id: str = ""
    app_secret: str = ""
    document_ids: list[str] = Field(default_factory=list)

    output_dir: Path = Path("./output")
    image_dir: Path = Path("./output/images")
    file_dir: Path = Path("./output/files")
    # HTML 中引用素材时使用的相对路径
    image_path: str = "images"
    file_path: str = "files"

    custom_css: Optional[str] = None
    external_css: bool = True
    css_file_name: str = "feishu-style.css"
    template_mode: TemplateMode = TemplateMode.DEFAULT
    inline_images: bool = False
    show_unsupported_blocks: bool = True

    max_concurrent_downloads: int = 10
    requests_per_second: int = 5
    max_retries: int = 3
    base_url: str = "https://open.feishu.cn"

    debug: bool = False
    quiet: bool = False
    log_dir: Optional[Path] = None

    @field_validator("document_ids", mode="before")
    @classmethod
    def _split_ids(cls, value: object) -> object:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("css_file_name", "image_path", "file_path", "base_url")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("不能为空")
        return cleaned

    @field_validator("max_concurrent_downloads", "requests_per_second", "max_retries")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("必须为正整数")
        return value

    def require_credentials(self) -> None:
        missing = [name for name in ("app_id", "app_secret") if not getattr(self, name).strip()]
        if missing:
            raise ConfigError(f"缺少配置: {', '.join(missing)}")


class ConfigManager:
    _instance: ClassVar[Optional["ConfigManager"]] = None

    def __init__(self, config_path: Optional[Path] = None) -> None:
        env_path = os.getenv(f"{ENV_PREFIX}CONFIG")
        if config_path is None and env_path:
            config_path = Path(env_path)
        self._config_path = config_path.expanduser() if config_path else None
        self._config = self._load_config()

    @property
    def config(self) -> ExportConfig:
        return self._config

    @property
    def config_path(self) -> Optional[Path]:
        return self._config_path

    def reload(self) -> ExportConfig:
        self._config = self._load_config()
        return self._config

    def _load_config(self) -> ExportConfig:
        data: dict[str, object] = {}
        if self._config_path is not None:
            if not self._config_path.exists():
                raise ConfigError(f"配置文件不存在: {self._config_path}")
            try:
                data = json.loads(self._config_path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                raise ConfigError(f"配置文件不是合法 JSON: {self._config_path}: {exc}") from exc
            if not isinstance(data, dict):
                raise ConfigError(f"配置文件顶层必须是对象: {self._config_path}")

        for key in ExportConfig.model_fields:
            env_value = os.getenv(f"{ENV_PREFIX}{key.upper()}")
            if env_value:
                data[key] = env_value

        try:
            return ExportConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"配置无效: {exc}") from exc

    @classmethod
    def get(cls) -> "ConfigManager":
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None


__all__ = ["ConfigManager", "ENV_PREFIX", "ExportConfig"]
