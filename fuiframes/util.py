from __future__ import annotations

import math
import shlex
from typing import List


def log(msg: str) -> None:
    print(f"[fuiframes] {msg}", flush=True)


def format_cmd(cmd: List[str]) -> str:
    return " ".join(shlex.quote(str(c)) for c in cmd)


def format_eta(seconds: float) -> str:
    if not math.isfinite(seconds) or seconds < 0:
        return "--:--:--"
    s = int(seconds)
    hh = s // 3600
    mm = (s % 3600) // 60
    ss = s % 60
    return f"{hh:02d}:{mm:02d}:{ss:02d}"


def fmt_num(x: float, digits: int = 4) -> str:
    # 12.3400 -> "12.34", -0.0000 -> "0"
    s = f"{x:.{digits}f}".rstrip("0").rstrip(".")
    if s in ("-0", ""):
        return "0"
    return s


def parse_hex_color(s: str) -> tuple[int, int, int]:
    """'#RRGGBB' or '#RGB' -> (r, g, b)."""
    text = s.strip().lstrip("#")
    if len(text) == 3:
        text = "".join(ch * 2 for ch in text)
    if len(text) != 6:
        raise ValueError(f"color must be '#RRGGBB': {s!r}")
    try:
        r, g, b = (int(text[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError as exc:
        raise ValueError(f"color must be '#RRGGBB': {s!r}") from exc
    return r, g, b
