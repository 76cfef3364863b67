"""Connect options exchanged with the server when a session is opened."""

from __future__ import annotations

from enum import IntEnum


class Cdm(IntEnum):
    """Client distribution mode values of the client distribution mode option."""

    OFF = 0
    CONNECTION = 1
    STATEMENT = 2
    CONNECTION_STATEMENT = 3


class Dpv(IntEnum):
    """Distribution protocol version values."""

    BASELINE = 0
    CLIENT_HANDLES_STATEMENT_SEQUENCE = 1


class ConnectOption(IntEnum):
    """Identifiers of the connect options."""

    CONNECTION_ID = 1
    COMPLETE_ARRAY_EXECUTION = 2  # deprecated, array execution semantics are always on
    CLIENT_LOCALE = 3
    SUPPORTS_LARGE_BULK_OPERATIONS = 4
    DISTRIBUTION_ENABLED = 5  # deprecated
    PRIMARY_CONNECTION_ID = 6  # deprecated
    PRIMARY_CONNECTION_HOST = 7  # deprecated
    PRIMARY_CONNECTION_PORT = 8  # deprecated
    COMPLETE_DATATYPE_SUPPORT = 9  # deprecated
    LARGE_NUMBER_OF_PARAMETERS_SUPPORT = 10
    SYSTEM_ID = 11
    DATA_FORMAT_VERSION = 12
    ABAP_VARCHAR_MODE = 13
    SELECT_FOR_UPDATE_SUPPORTED = 14
    CLIENT_DISTRIBUTION_MODE = 15
    ENGINE_DATA_FORMAT_VERSION = 16
    DISTRIBUTION_PROTOCOL_VERSION = 17
    SPLIT_BATCH_COMMANDS = 18
    USE_TRANSACTION_FLAGS_ONLY = 19
    ROW_SLOT_IMAGE_PARAMETER = 20
    IGNORE_UNKNOWN_PARTS = 21
    TABLE_OUTPUT_PARAMETER_METADATA_SUPPORT = 22
    DATA_FORMAT_VERSION2 = 23
    ITAB_PARAMETER = 24
    DESCRIBE_TABLE_OUTPUT_PARAMETER = 25
    COLUMNAR_RESULT_SET = 26
    SCROLLABLE_RESULT_SET = 27
    CLIENT_INFO_NULL_VALUE_SUPPORTED = 28
    ASSOCIATED_CONNECTION_ID = 29
    NON_TRANSACTIONAL_PREPARE = 30
    FDA_ENABLED = 31
    OS_USER = 32
    ROW_SLOT_IMAGE_RESULT_SET = 33
    ENDIANNESS = 34
    UPDATE_TOPOLOGY_ANYWHERE = 35
    ENABLE_ARRAY_TYPE = 36
    IMPLICIT_LOB_STREAMING = 37
    CACHED_VIEW_PROPERTY = 38
    X_OPEN_XA_PROTOCOL_SUPPORTED = 39
    PRIMARY_COMMIT_REDIRECTION_SUPPORTED = 40
    ACTIVE_ACTIVE_PROTOCOL_VERSION = 41
    ACTIVE_ACTIVE_CONNECTION_ORIGIN_SITE = 42
    QUERY_TIMEOUT_SUPPORTED = 43
    FULL_VERSION_STRING = 44
    DATABASE_NAME = 45
    BUILD_PLATFORM = 46
    IMPLICIT_XA_SESSION_SUPPORTED = 47
    CLIENT_SIDE_COLUMN_ENCRYPTION_VERSION = 48
    COMPRESSION_LEVEL_AND_FLAGS = 49
    CLIENT_SIDE_RE_EXECUTION_SUPPORTED = 50
    CLIENT_RECONNECT_WAIT_TIMEOUT = 51
    ORIGINAL_ANCHOR_CONNECTION_ID = 52
    FLAG_SET1 = 53
    TOPOLOGY_NETWORK_GROUP = 54
    IP_ADDRESS = 55
    LRR_PING_TIME = 56