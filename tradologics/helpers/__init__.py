from tradologics.helpers.bars import mean, median, parse_bars

__all__ = ["mean", "median", "parse_bars"]
