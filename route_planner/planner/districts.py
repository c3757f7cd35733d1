"""
District catalog for Ueda City, Nagano.

Areas are listed in display order, each with its sub-districts. Selections
are plain lists of sub-district names.
"""

from typing import Dict, List


UEDA_DISTRICTS_GROUPED: Dict[str, List[str]] = {
    "上田地域（旧上田市中心部）": [
        "大手", "中央", "中央西", "中央北", "天神", "常田", "緑が丘", "材木町",
        "常磐城", "国分", "踏入", "住吉",
    ],
    "上田地域（城南・川辺）": ["城南", "房山", "上田", "常入", "秋和"],
    "上田地域（神科・豊殿）": [
        "神科", "上塩尻", "金井", "下塩尻", "岡", "伊勢山", "染屋",
    ],
    "上田地域（塩田地区）": [
        "下之郷", "生田", "神畑", "古里", "上野", "築地", "芳田", "仁古田",
        "林之郷", "古安曽", "舞田", "八木沢", "手塚", "富士山", "別所温泉", "五加",
        "中野", "小泉", "保野", "石井", "山田", "福田", "前山",
    ],
    "丸子地域": [
        "東内", "西内", "平井", "御屋敷", "中丸子", "上丸子", "下丸子", "腰越",
        "藤原田", "長瀬", "和子", "御岳堂", "塩川", "大屋", "小屋", "中塩", "下塩",
        "上本木", "下本木",
    ],
    "真田地域": [
        "本原", "横沢", "大日向", "戸沢", "渋沢", "殿城", "横尾", "戸石", "真田",
        "長", "傍陽", "石舟", "大倉", "菅平",
    ],
    "武石地域": ["上武石", "下武石", "沖", "鳥屋", "上岡", "下岡", "余里", "権現"],
}


def all_districts() -> List[str]:
    """Flat list of every sub-district, in catalog order."""
    return [d for districts in UEDA_DISTRICTS_GROUPED.values() for d in districts]


def is_known_district(name: str) -> bool:
    return any(name in districts for districts in UEDA_DISTRICTS_GROUPED.values())


def select_all(checked: bool) -> List[str]:
    """
    Selection produced by the "select all / clear" toggle.

    Args:
        checked: New state of the toggle

    Returns:
        The full flat catalog when checked, otherwise an empty selection.
    """
    return all_districts() if checked else []


def toggle_district(selected: List[str], district: str) -> List[str]:
    """
    Add or remove a single district from a selection.

    Args:
        selected: Current selection
        district: District to toggle

    Returns:
        New selection; removal keeps the remaining order, addition appends.
    """
    if district in selected:
        return [d for d in selected if d != district]
    return [*selected, district]


def is_all_selected(selected: List[str]) -> bool:
    catalog = all_districts()
    return len(catalog) > 0 and set(selected) == set(catalog)
