from clonespotter.core.models import HashAlgorithm, DEFAULT_EXCLUDED_DIRS, DEFAULT_WORKERS

APP_NAME = "Clone Spotter"
APP_AUTHOR = "James Carvallyo II"

DEFAULT_OUTPUT_DIR = "./output"
DEFAULT_FILENAME = "duplicates"
MAX_VERBOSE_GROUPS = 10

ALGORITHM_ALIASES = {algorithm.value: algorithm for algorithm in HashAlgorithm}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

ALGORITHM_HELP_TEXT = (
    "Hash algorithm used to compare file content:\n"
    "  md5     : 128-bit, fast (default)\n"
    "  sha1    : 160-bit\n"
    "  sha256  : 256-bit\n"
    "  sha512  : 512-bit\n"
    "  xxh128  : 128-bit non-cryptographic, fastest on large files\n"
    "Example    : %(prog)s ~/Downloads -a sha256\n"
)

EXCLUDE_HELP_TEXT = (
    "Comma-separated name fragments to exclude, added to the defaults:\n"
    f"  {', '.join(DEFAULT_EXCLUDED_DIRS)}\n"
    "Any path containing a fragment is skipped (substring match).\n"
    "Example    : %(prog)s ~/code -e vendor,.cache\n"
)

WORKERS_HELP_TEXT = (
    f"Number of parallel hashing threads. Default: {DEFAULT_WORKERS}.\n"
    "Invalid or non-positive values fall back to the default.\n"
    "With 1 worker the chosen 'original' for each duplicate set is reproducible\n"
    "between runs; with more, whichever file finishes hashing first wins.\n"
)

EPILOG_TEXT = """
Examples:
  Interactive mode - answer prompts for every option
  %(prog)s

  Find duplicates in Downloads, write ./output/duplicates.json
  %(prog)s ~/Downloads

  Use SHA-256, custom output location, also print the JSON
  %(prog)s -d ~/Pictures -a sha256 -o ~/reports -f pictures -t

  Extra exclusions and 8 hashing threads
  %(prog)s ~/code -e vendor,.venv -w 8 --verbose
"""
