# hdbwire

Building blocks for the HANA SQL command network protocol, written in pure
Python with no runtime dependencies. The package encodes and decodes the
protocol's field types, runs the client side of the authentication
handshake, decodes error reports from the server and converts Python values
into the forms that the protocol's field types accept.

## Modules

- `hdbwire.encoding`
  - `Encoder` writes to a binary stream, and `Decoder` reads from one.
    - They handle little-endian integers and floats, with big-endian
      variants of `uint16` and `uint32`.
    - They handle Decimal128 values (`decimal`) as a `(mantissa, exponent)`
      pair.
    - They handle two's-complement fixed decimals (`fixed`).
    - They handle length-indicated byte strings (`li_bytes`, `li_string`)
      and CESU-8 strings (`cesu8_bytes`, `cesu8_li_bytes`,
      `cesu8_li_string`).
  - `Decoder.count` is the number of bytes read since the last
    `reset_count()`.
  - A read past the end of the stream raises `EOFError`.
  - By default CESU-8 is converted to and from UTF-8. Another transform
    function can be passed to either class.
  - Helpers:
    - `var_field_size` gives the encoded size of a length-indicated field.
    - `cesu8_size` gives the CESU-8 length of a string.
    - `utf8_to_cesu8` and `cesu8_to_utf8` convert between the two encodings.

- `hdbwire.auth`
  - `Auth` collects the authentication methods that are offered:
    - `add_jwt`
    - `add_basic`, which adds both SCRAM methods
    - `add_session_cookie`
  - It builds the handshake parts:
    - `init_request()` and `final_request()` give parts with `size()` and
      `encode(enc)`.
    - `init_reply()` and `final_reply()` give parts with `decode(dec)`.
  - Methods are offered in a fixed order: session cookie, JWT,
    SCRAMPBKDF2SHA256, SCRAMSHA256.
  - Decoding the init reply selects the method the server chose, which is
    then available as `Auth.method`.

- `hdbwire.auth_methods`
  - `Prms`, the parameter list of an authentication part, and
    `AuthDecoder`.
  - The `JWT` and `SessionCookie` methods. `JWT.cookie` gives the logon
    name and the session cookie the server returned.
  - `AuthError`, raised for malformed or unexpected authentication data.

- `hdbwire.scram`
  - The `SCRAMSHA256` and `SCRAMPBKDF2SHA256` methods.
  - The key and proof functions they use:
    - `scramsha256_key`
    - `scrampbkdf2sha256_key`
    - `client_proof`
    - `client_challenge`

- `hdbwire.hdberror`
  - `HdbErrors` is an exception that holds the `HdbError` records sent by
    the server.
    - It decodes them with `decode(dec, num_arg)`.
    - `set_idx` selects the current record, and `code`, `text`, `level`,
      `position`, `stmt_no` and `is_warning`/`is_error`/`is_fatal` refer to
      it.
    - `has_warnings()` tells whether every record is a warning.
  - Also here:
    - `ErrorLevel`
    - `DecodeError` and `DecodeErrors` (with `row_error`)
    - `FatalError`

- `hdbwire.convert`
  - Checked conversions into field values:
    - `convert_bool`
    - `convert_integer`, with range checks
    - `convert_float`
    - `convert_time`
    - `convert_decimal`
    - `convert_bytes`
  - They raise `ConvertError` or one of its subclasses:
    - `IntegerOutOfRangeError`
    - `Uint64OutOfRangeError`
    - `FloatOutOfRangeError`
  - Conversions between `fractions.Fraction` and decimal or fixed
    representations, which report `DecimalFlag` values (`NOT_EXACT`,
    `OVERFLOW`, `UNDERFLOW`):
    - `convert_rat_to_decimal`, `convert_decimal_to_rat`
    - `convert_rat_to_fixed`, `convert_fixed_to_rat`
  - Secondtime conversions: `convert_secondtime_to_time` and
    `convert_time_to_secondtime`.

- `hdbwire.identifier`
  - `Identifier` renders simple upper-case names as they are and quotes
    all other names.
  - `random_identifier(prefix)` appends 16 random alphanumeric characters
    to the prefix.

- `hdbwire.fieldnames`
  - `FieldNames` maps name offsets to names and reads those names from a
    `Decoder`.

- `hdbwire.datatype`
  - The `DataType` enumeration.
  - `DataType.scan_type()`, which gives the Python type for each data type.
  - `register_scan_type`, which registers the scan type of a data type.

- `hdbwire.dfv`
  - `supported_dfvs` and `is_supported_dfv` for data format versions.

- `hdbwire.connectoption`
  - The `ConnectOption`, `Cdm` and `Dpv` enumerations.

- `hdbwire.logflag`
  - `LogFlag` switches a `logging.Logger` between output to standard error
    and discarded output. `set("true")` and `set("false")` do the switching.

## Installation

```
pip install hdbwire
```

## Examples

Round trip of a length-indicated CESU-8 string:

```python
import io
from hdbwire.encoding import Encoder, Decoder

buf = io.BytesIO()
Encoder(buf).cesu8_li_string("Hello, 世界")
buf.seek(0)
n, text = Decoder(buf).cesu8_li_string()   # text == "Hello, 世界"
```

Encode the first step of a JWT authentication:

```python
import io
from hdbwire.auth import Auth
from hdbwire.encoding import Encoder

auth = Auth("")
auth.add_jwt("token")
buf = io.BytesIO()
auth.init_request().encode(Encoder(buf))
```

Quote an identifier:

```python
from hdbwire.identifier import Identifier

str(Identifier("a.b.c"))    # '"a.b.c"'
str(Identifier("TABLE_1"))  # 'TABLE_1'
```

Convert a fraction to a decimal mantissa and exponent:

```python
from fractions import Fraction
from hdbwire.convert import convert_rat_to_decimal

m, exp, flags = convert_rat_to_decimal(Fraction(1, 4), 34, -6176, 6111)
# m == 25, exp == -2, no flags set
```

## What it does not do

hdbwire is a set of protocol pieces, not a database driver.

- It opens no network connections.
- It has no message or segment framing.
- It does not execute SQL statements, and it has no result set or LOB
  handling.
- It offers no DB-API interface.
- X.509 certificate authentication is not included.
- Of the date and time field types, only the secondtime conversion is
  included.

## Running the tests

```
pip install -e ".[test]"
pytest
```