from csslint.parser.scanner import MAX_DEPTH, parse, split_top_level
from csslint.parser.selectors import parse_selector, parse_selector_list

__all__ = ["parse", "parse_selector", "parse_selector_list", "split_top_level", "MAX_DEPTH"]
