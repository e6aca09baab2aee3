"""gh-pages clean - Remove cached working copies."""

from ghpages.lib.cache import clean_cache, get_cache_dir
from ghpages.lib.constants import EXIT_SUCCESS


def cmd_clean(args) -> int:
    cache_dir = get_cache_dir(args.cache_dir)
    if clean_cache(args.cache_dir):
        print(f"Removed {cache_dir}")
    else:
        print(f"Nothing to clean at {cache_dir}")
    return EXIT_SUCCESS
