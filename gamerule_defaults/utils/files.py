import json
import os
import tempfile
from pathlib import Path
from typing import Any


def write_json_atomic(path: Path, data: Any, indent: int = 2):
    """
    Writes `data` as JSON to a temporary file next to `path`, then renames it
    over `path`. Readers never see a half-written file.
    """
    path = Path(path)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        suffix=".tmp",
        prefix=f".{path.name}.",
        dir=path.parent,
        delete=False,
    ) as f:
        tmp_path = Path(f.name)
        try:
            json.dump(data, f, indent=indent, ensure_ascii=False)
            f.write("\n")
        except BaseException:
            f.close()
            tmp_path.unlink(missing_ok=True)
            raise

    try:
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
