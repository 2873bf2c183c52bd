from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import orjson


@dataclass(frozen=True)
class AssetRef:
    asset_id: Optional[str]
    proj: Optional[str]


def build_import_manifest(
    table_name: str,
    table_proj: str,
    assets: Sequence[AssetRef],
) -> Optional[str]:
    """Serialize an import request for ``assets`` into ``table_name``.

    Returns ``None`` when the table name is empty, the project is unset or
    there are no assets. Entries keep the given order; an entry's ``id`` or ``proj`` key is left out when unset.
    """
    if not table_name or table_proj is None or not assets:
        return None

    inputs: List[Dict[str, Any]] = []
    for asset in assets:
        entry: Dict[str, Any] = {}
        if asset.asset_id is not None:
            entry["id"] = asset.asset_id
        if asset.proj is not None:
            entry["proj"] = asset.proj
        inputs.append(entry)

    doc = {"table_name": table_name, "table_proj": table_proj, "inputs": inputs}
    return orjson.dumps(doc, option=orjson.OPT_INDENT_2).decode("utf-8")
