# src/nongli/core/ganzhi.py
from __future__ import annotations

from typing import Tuple

# 天干 / 地支 / 生肖
GAN: Tuple[str, ...] = ("甲", "乙", "丙", "丁", "戊", "己", "庚", "辛", "壬", "癸")
ZHI: Tuple[str, ...] = ("子", "丑", "寅", "卯", "辰", "巳", "午", "未", "申", "酉", "戌", "亥")
ANIMALS: Tuple[str, ...] = ("鼠", "牛", "虎", "兔", "龙", "蛇", "马", "羊", "猴", "鸡", "狗", "猪")

# 公元 4 年 = 甲子
SEXAGENARY_EPOCH_YEAR = 4


def stem_index(year: int) -> int:
    return (int(year) - SEXAGENARY_EPOCH_YEAR) % 10


def branch_index(year: int) -> int:
    return (int(year) - SEXAGENARY_EPOCH_YEAR) % 12


def animal_index(year: int) -> int:
    # 生肖 follows the branch
    return branch_index(year)


def year_ganzhi(year: int) -> str:
    """
    e.g. 1984 -> "甲子", 2024 -> "甲辰"
    """
    return GAN[stem_index(year)] + ZHI[branch_index(year)]


def year_animal(year: int) -> str:
    return ANIMALS[animal_index(year)]


def cycle_position(year: int) -> int:
    """
    Position 0..59 in the sexagenary cycle (0 = 甲子).
    """
    return (int(year) - SEXAGENARY_EPOCH_YEAR) % 60
