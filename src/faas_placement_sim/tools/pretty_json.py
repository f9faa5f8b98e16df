"""pretty_json.py

按行写出对象数组的 JSON 文件：

{
    "placements": [
        {"invocation_id": 0, ...},
        {"invocation_id": 1, ...}
    ],
    "hosts": [
        {"host_id": 0, "capacity": 1024}
    ]
}
"""

import json
from typing import Mapping, Sequence


def pretty_json_dump(path: str, tab_size: int = 4, **sections: Sequence[Mapping[str, object]]):
    """将若干个对象数组写入 JSON 文件，数组中的每个对象占一行

    Args:
        path (str): 输出文件路径
        tab_size (int): 缩进空格数
        **sections: 顶层键及其对应的对象数组
    """

    tab = " " * tab_size
    blocks: list[str] = []

    for key, items in sections.items():
        rows = ",\n".join(tab * 2 + json.dumps(item, ensure_ascii=False) for item in items)
        blocks.append(f'{tab}"{key}": [\n' + (rows + "\n" if rows else "") + f"{tab}]")

    with open(path, "w", encoding="utf-8") as f:
        f.write("{\n" + ",\n".join(blocks) + ("\n" if blocks else "") + "}")
