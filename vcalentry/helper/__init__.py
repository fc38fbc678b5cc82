from .config import get_buffer, logger
from .constants import Block, Character
from .converter import to_unicode, to_vname
from .funcs import backslash_unescape, indent_str, minutes_to_offset
