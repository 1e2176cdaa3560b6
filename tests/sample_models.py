"""Destination records shared by the tests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from initag import Float32, Int8, Int16, IniField, UInt8, UInt16, UInt64, ini_field


class Mysql(BaseModel):
    default_socket: str = IniField("default_socket", default="")
    cache_size: int = IniField("cache_size", default=0)
    port: UInt16 = IniField("port", default=3306)
    debug: bool = IniField("debug", default=False)
    ratio: Float32 = IniField("ratio", default=0.0)
    started: Optional[datetime] = IniField("started", default=None)


class Server(BaseModel):
    host: str = IniField("host", default="localhost")
    timeout: float = IniField("timeout", default=1.5)
    retries: Int8 = IniField("retries", default=0)
    note: str = Field(default="untagged")


class AppConfig(BaseModel):
    mysql: Mysql = IniField("[Mysql]", default_factory=Mysql)
    server: Server = IniField("[Server]", default_factory=Server)
    name: str = IniField("[Name]", default="")


class Inner(BaseModel):
    value: int = IniField("value", default=0)


class Mid(BaseModel):
    inner: Inner = IniField("[Inner]", default_factory=Inner)
    level: int = IniField("level", default=0)


class DeepConfig(BaseModel):
    mid: Mid = IniField("[Mid]", default_factory=Mid)


@dataclass
class Limits:
    small: Int8 = ini_field("small", default=0)
    tiny: UInt8 = ini_field("tiny", default=0)
    medium: Int16 = ini_field("medium", default=0)
    big: UInt64 = ini_field("big", default=0)
    single: Float32 = ini_field("single", default=0.0)
    double: float = ini_field("double", default=0.0)
    flag: bool = ini_field("flag", default=False)
    label: str = ini_field("label", default="")
    untagged: int = 0


@dataclass
class LimitsConfig:
    limits: Limits = ini_field("[Limits]", default_factory=Limits)


class NeedsArgs(BaseModel):
    required: str = IniField("required")
