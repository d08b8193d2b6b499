import logging
from typing import Any

LOG_EXTRA_FIELDS = (
    "relation",
    "name",
    "type_name",
    "matches",
    "url",
    "status",
    "duration_ms",
    "attempt",
)


class LogfmtFormatter(logging.Formatter):
    """
    Renders relation events as logfmt, e.g.
    `level=info logger=hyper_resource.resolver event=relation_follow
    relation=related name=reference matches=2`. A relation's disambiguating
    name travels as `rel_name` because `name` is taken by the logger name.
    """

    def format(self, record: logging.LogRecord) -> str:
        kv: list[str] = [
            f"level={record.levelname.lower()}",
            f"logger={record.name}",
        ]

        msg = record.getMessage()
        if msg:
            kv.append(f"event={self._fmt_val(msg)}")

        for key in LOG_EXTRA_FIELDS:
            # "name" is also the logger name on every LogRecord
            val = getattr(record, "rel_name" if key == "name" else key, None)
            if val is None:
                continue
            kv.append(f"{key}={self._fmt_val(val)}")

        if record.exc_info:
            kv.append(f"exc_type={record.exc_info[0].__name__}")

        return " ".join(kv)

    @staticmethod
    def _fmt_val(val: Any) -> str:
        if isinstance(val, (int, float, bool)):
            return str(val)
        s = str(val)
        if " " in s or "=" in s:
            s = '"' + s.replace('"', '\\"') + '"'
        return s


def setup_logging(level: str = "INFO") -> None:
    """Initialize root logging with logfmt output. Never called on import."""

    root = logging.getLogger()
    # Avoid duplicate handlers if called twice
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS"]
