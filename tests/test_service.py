# tests/test_service.py

from datetime import date, datetime, timezone

import pytest

from calzh.core.errors import UnsupportedConfigurationError
from calzh.service import GanzhiYear, LunarService, ServiceConfig
from calzh.service.i18n import I18N, lunar_day_name, lunar_month_name

def test_unknown_locale_is_rejected_at_construction():
    with pytest.raises(UnsupportedConfigurationError):
        ServiceConfig(locale="fr-FR")
    with pytest.raises(ValueError):
        ServiceConfig(locale="en")

@pytest.mark.parametrize(
    "day, name",
    [(1, "初一"), (10, "初十"), (11, "十一"), (19, "十九"), (20, "二十"), (21, "廿一"), (29, "廿九"), (30, "三十")],
)
def test_day_names(day, name):
    assert lunar_day_name(day) == name

def test_day_name_range():
    with pytest.raises(ValueError):
        lunar_day_name(31)

def test_month_names_per_locale():
    assert lunar_month_name(1, False, "zh-CN") == "正月（一月）"
    assert lunar_month_name(12, False, "zh-CN") == "腊月（十二月）"
    assert lunar_month_name(12, False, "zh-TW") == "臘月（十二月）"
    assert lunar_month_name(2, True, "zh-CN") == "闰二月"
    assert lunar_month_name(2, True, "zh-TW") == "閏二月"
    for text in I18N.values():
        assert sorted(text.months) == list(range(1, 13))

def test_from_date_leap_month():
    info = LunarService().from_date(date(2023, 3, 22))
    assert info.solar_text == "2023-03-22"
    assert (info.month, info.day, info.is_leap) == (2, 1, True)
    assert info.month_length == 29
    assert info.astro_year == 2023
    assert info.civil_year == 2023
    assert info.ganzhi == GanzhiYear(2023, "癸卯", "兔")
    assert info.display == "癸卯年（兔） 闰二月 初一"

def test_three_year_numberings_disagree_in_january():
    # after the solstice month but before both Spring Festival and Li Chun
    info = LunarService().from_date(date(2023, 1, 10))
    assert info.month == 12
    assert info.astro_year == 2022
    assert info.civil_year == 2022
    assert info.ganzhi_year == 2022
    assert info.ganzhi.ganzhi == "壬寅"

    # after Spring Festival, before Li Chun
    info = LunarService().from_date(date(2023, 2, 1))
    assert info.civil_year == 2023
    assert info.ganzhi_year == 2022

def test_zh_tw_animals():
    svc = LunarService(ServiceConfig(locale="zh-TW"))
    assert svc.from_date(date(2024, 6, 1)).ganzhi == GanzhiYear(2024, "甲辰", "龍")

def test_precise_li_chun_capability():
    # Li Chun 2024 falls at about 08:27 UTC on Feb 4
    morning = datetime(2024, 2, 4, 1, 0, tzinfo=timezone.utc)
    evening = datetime(2024, 2, 4, 12, 0, tzinfo=timezone.utc)

    fallback = LunarService(ServiceConfig(precise_li_chun=False))
    precise = LunarService(ServiceConfig(precise_li_chun=True))

    assert fallback.ganzhi_year(morning).year == 2024
    assert precise.ganzhi_year(morning).year == 2023
    assert precise.ganzhi_year(evening) == GanzhiYear(2024, "甲辰", "龙")

def test_sexagenary_cycle_wraps():
    svc = LunarService()
    assert svc.ganzhi_year(date(1984, 3, 1)).ganzhi == "甲子"
    assert svc.ganzhi_year(date(1983, 3, 1)).ganzhi == "癸亥"

def test_same_solar_date_this_year():
    svc = LunarService()
    info = svc.same_solar_date_this_year(date(2020, 3, 22), today=date(2023, 7, 1))
    assert info.solar_text == "2023-03-22"
    assert info.is_leap is True

    leap_day = svc.same_solar_date_this_year(date(2020, 2, 29), today=date(2023, 7, 1))
    assert leap_day.solar_text == "2023-02-28"

def test_unknown_engine():
    with pytest.raises(KeyError):
        LunarService(ServiceConfig(engine="mars"))
