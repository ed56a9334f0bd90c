from .parse_cmds import register as register_parse

__all__ = ["register_parse"]
