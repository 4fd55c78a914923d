"""Nests dotted JSDoc parameters under their owners.

JSDoc documents object properties as separate parameters with dotted
names (``options``, ``options.weekStartsOn``). The docs website expects
them nested instead, with each owner carrying a ``props`` list.
"""

import copy
from typing import Any, Optional


def params_to_tree(
    dirty_params: Optional[list[dict[str, Any]]],
) -> Optional[list[dict[str, Any]]]:
    """Convert a flat parameter list into a one-level tree.

    Each not-yet-nested parameter with a dotted name is split at the
    first dot: the prefix names its owner, the suffix becomes its new
    name. It is flagged ``isProperty`` and appended to the owner's
    ``props``. Flagged parameters are then dropped from the top level.
    Only one level of nesting is produced; ``options.range.start`` ends
    up as ``range.start`` under ``options``.

    Args:
        dirty_params: Parameters as emitted by the parser. Not modified.

    Returns:
        Top-level parameters in their original order, or None when the
        record documents no parameters at all.

    Raises:
        ValueError: If a dotted parameter's owner is not documented.
    """
    if dirty_params is None:
        return None

    params = copy.deepcopy(dirty_params)
    param_indices = {param["name"]: index for index, param in enumerate(params)}

    for param in params:
        owner_name, dot, prop_name = param["name"].partition(".")
        if not dot or param.get("isProperty"):
            continue

        if owner_name not in param_indices:
            raise ValueError(
                f"Parameter {param['name']!r} refers to undocumented "
                f"parameter {owner_name!r}"
            )
        owner = params[param_indices[owner_name]]

        param["name"] = prop_name
        param["isProperty"] = True
        owner.setdefault("props", []).append(param)

    return [param for param in params if not param.get("isProperty")]
