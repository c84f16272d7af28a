# Codec IDs (0=stored, 1=deflate/zlib)
CODEC_NONE = 0
CODEC_DEFLATE = 1

DEFAULT_CODEC_ID = CODEC_DEFLATE
DEFAULT_LEVEL = 6

COPY_BUFFER_SIZE = 1_048_576  # 1 MiB

# Progress line emitted when the destination archive is found inside its own source tree
SKIP_SELF_MESSAGE = "skip self"

DIR_MODE = 0o755
