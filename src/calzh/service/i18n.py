"""Locale text tables for lunar month, day and sexagenary-cycle names."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Mapping

from ..core.errors import UnsupportedConfigurationError

_NUMERALS = "一二三四五六七八九十"


@dataclass(frozen=True)
class LocaleText:
    stems: str
    branches: str
    animals: str
    months: Mapping[int, str]
    leap_prefix: str


_MONTHS_COMMON = {
    1: "正月（一月）",
    2: "二月",
    3: "三月",
    4: "四月",
    5: "五月",
    6: "六月",
    7: "七月",
    8: "八月",
    9: "九月",
    10: "十月",
    11: "冬月（十一月）",
}

I18N: Dict[str, LocaleText] = {
    "zh-CN": LocaleText(
        stems="甲乙丙丁戊己庚辛壬癸",
        branches="子丑寅卯辰巳午未申酉戌亥",
        animals="鼠牛虎兔龙蛇马羊猴鸡狗猪",
        months={**_MONTHS_COMMON, 12: "腊月（十二月）"},
        leap_prefix="闰",
    ),
    "zh-TW": LocaleText(
        stems="甲乙丙丁戊己庚辛壬癸",
        branches="子丑寅卯辰巳午未申酉戌亥",
        animals="鼠牛虎兔龍蛇馬羊猴雞狗豬",
        months={**_MONTHS_COMMON, 12: "臘月（十二月）"},
        leap_prefix="閏",
    ),
}


def locale_text(locale: str) -> LocaleText:
    if locale not in I18N:
        raise UnsupportedConfigurationError(f"Unsupported locale '{locale}'. Available: {sorted(I18N)}")
    return I18N[locale]


def lunar_day_name(day: int) -> str:
    """初一 .. 初十, 十一 .. 十九, 二十, 廿一 .. 廿九, 三十."""
    if not 1 <= day <= 30:
        raise ValueError(f"lunar day must be in 1..30, got {day}")
    if day <= 10:
        return "初" + _NUMERALS[day - 1]
    if day < 20:
        return "十" + _NUMERALS[day - 11]
    if day == 20:
        return "二十"
    if day < 30:
        return "廿" + _NUMERALS[day - 21]
    return "三十"


def lunar_month_name(month: int, is_leap: bool, locale: str) -> str:
    text = locale_text(locale)
    return (text.leap_prefix if is_leap else "") + text.months[month]
