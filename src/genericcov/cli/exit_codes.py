# mirror <sysexits.h>
EXIT_OK = 0  # Normal success
EXIT_GENERIC = 1  # Generic failure (fallback)
EXIT_DATAERR = 65  # Input data was invalid (e.g., malformed report XML)
EXIT_NOINPUT = 66  # Input file not found (e.g., report missing or none configured)
