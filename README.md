# wafops

Building blocks for a web application firewall rule engine: the
*transformations* that normalise a request value before inspection, and
the *operators* that decide whether a value matches a rule. Both follow
the conventions of the ModSecurity rule language.

## Installation

```
pip install wafops
```

The only runtime dependency is `regex`.

## Transformations

Every transformation is a plain function that takes one value and returns
a new string. Values are text whose code points stand for the UTF-8 bytes
of the data; bytes that are not valid UTF-8 travel as lone surrogates
(the `surrogateescape` error handler), so nothing is lost. `bytes` are
accepted as input as well.

```python
from wafops.transformations.encoding import url_decode, hex_encode, lowercase
from wafops.transformations.cleanup import compress_whitespace
from wafops.transformations.paths import normalise_path

url_decode("a%20b+c")            # 'a b c'
hex_encode("abc")                # '616263'
lowercase("SELECT")              # 'select'
compress_whitespace("a \t\n b")  # 'a b'
normalise_path("/a/./b/../c/")   # '/a/c/'
```

The modules and what they hold:

- `wafops.transformations.encoding`: `base64_decode`, `hex_encode`,
  `length`, `lowercase`, `md5`, `sha1` (raw digests), `none`,
  `url_decode`, `url_decode_uni` (also `%uHHHH`, with full-width ASCII
  folded to plain ASCII) and `url_encode`; plus the helpers `x2c`,
  `is_hex_digit` and `is_space`.
- `wafops.transformations.cleanup`: `cmd_line`, `compress_whitespace`,
  `remove_comments`, `remove_comments_char`, `remove_nulls`,
  `remove_whitespace`, `replace_comments` and `replace_nulls`.
- `wafops.transformations.paths`: `normalise_path` for slash-separated
  paths and `normalise_path_win` for backslash-separated ones (returned
  with forward slashes, drive letters and UNC prefixes kept).
- `wafops.transformations.utf8`: `utf8_to_unicode`, which rewrites
  multi-byte UTF-8 sequences as `%uHHHH` escapes.

## Operators

An operator is built from its rule argument and evaluated against a
value. The first argument to `evaluate` is the transaction the rule runs
in. It is any object with `macro_expansion(data)` and
`capture_field(index, value)`; `Rx` and `ValidateNid` also call
`reset_capture()` when it is there, and `ValidateNid` only captures when
the transaction's `capture` attribute is true. Pass `None` when no
transaction is at hand: arguments are then used as written and nothing
is captured.

```python
from wafops.operators.registry import new_operator

ge = new_operator("ge", "2500")
ge.evaluate(None, "2800")            # True
ge.evaluate(None, "2400")            # False

ip = new_operator("ipMatch", "127.0.0.1, 192.168.0.0/24")
ip.evaluate(None, "192.168.0.253")   # True
ip.evaluate(None, "192.168.1.1")     # False

byte_range = new_operator("validateByteRange", "32-36,38-126")
byte_range.evaluate(None, "hello world")   # False: every byte is allowed
```

`new_operator(name, data)` raises `KeyError` for an unknown name;
`operators_map()` returns the mapping from name to class. The names are
`beginsWith`, `contains`, `endsWith`, `eq`, `ge`, `gt`, `le`, `lt`,
`streq`, `within`, `pm`, `pmFromFile`, `rx`, `ipMatch`,
`ipMatchFromFile`, `inspectFile`, `validateByteRange`,
`validateUrlEncoding`, `validateUtf8Encoding`, `validateNid`, `noMatch`
and `unconditionalMatch`.

The classes live in:

- `wafops.operators.base`: the `Operator` base class, `NoMatch`,
  `UnconditionalMatch` and the helpers `expand_macros`, `capture_field`
  and `parse_int`.
- `wafops.operators.comparison`: `BeginsWith`, `Contains`, `EndsWith`,
  `Streq`, `Within` and the numeric `Eq`, `Ge`, `Gt`, `Le`, `Lt`, which
  read a side that is not a valid integer as zero.
- `wafops.operators.matching`: `Pm` and `PmFromFile` (case-insensitive
  phrase lists, searched with the Aho-Corasick `KeywordTrie`), `Rx`,
  `IpMatch` and `IpMatchFromFile`. File-based operators read their file
  when they are created, so a missing file raises `OSError` there.
- `wafops.operators.validation`: `ValidateByteRange`,
  `ValidateUrlEncoding` and `validate_url_encoding`, which returns a
  `UrlEncodingStatus`.
- `wafops.operators.unicode_check`: `ValidateUtf8Encoding` and
  `detect_utf8_character`, which raises `Utf8Error` (carrying a
  `Utf8Fault`) for a bad sequence.
- `wafops.operators.validate_nid`: `ValidateNid`, built from
  `"<country> <regex>"`; bad arguments raise `ValueError`.
- `wafops.operators.nids`: the id number checks `NidCl` (Chile) and
  `NidUs` (United States), and `nid_map()`.
- `wafops.operators.external`: `InspectFile`, which runs the program
  named by its argument with the value as its single argument and
  matches when the program exits with status 0 within ten seconds.

## What the package does not do

- There is no lookup of transformations by their rule-language name;
  import the functions from their modules.
- There are no HTML entity, JavaScript, CSS or C escape sequence
  decoders.
- There is no rule parser, rule engine or transaction: operators are
  evaluated one at a time against a transaction object you provide.
- There are no SQL injection or XSS detectors, no geographic lookup and
  no DNS blocklist operator.

## Running the tests

```
pip install -e ".[test]"
pytest
```