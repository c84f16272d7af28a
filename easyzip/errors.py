class EasyZipError(Exception):
    """Base class for easyzip-specific errors."""


# Path resolution / source validation
class PathError(EasyZipError):
    pass


class NotFoundError(EasyZipError):
    pass


class NotDirectoryError(EasyZipError):
    pass


class AlreadyExistsError(EasyZipError):
    pass


# Container/codec related
class ArchiveOpenError(EasyZipError):
    pass


class ArchiveCorruptError(ArchiveOpenError):
    """Entry content failed to decode (bad CRC, truncated or corrupt stream)."""


class ArchiveWriteError(EasyZipError):
    pass
