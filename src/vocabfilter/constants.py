"""Project-wide named constants."""

# Level bound meaning "no constraint" for both JLPT and WaniKani levels.
# The query engine treats any value outside its level range the same way.
NO_LEVEL: int = 0

# Environment variable naming a JSON config file for the CLI.
CONFIG_ENV_VAR: str = "VOCABFILTER_CONFIG"

LOGGER_NAME: str = "vocabfilter"
