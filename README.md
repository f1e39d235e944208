# hashtab

Helpers for checking files against published hashes: reading checksum
files, converting hash strings, keeping user settings, and looking hashes
up online.

## Modules

- `hashtab.utl`
  - `hash_bytes_to_string(data, upper=True)` renders hash bytes as hex.
  - `hash_string_to_bytes(text)` parses hex, with optional spaces between byte pairs. It returns `b""` for invalid input.
  - `find_hash_in_string(text)` finds the first run of four or more hex byte pairs in free text.
  - `hex_digit` and `unhex` convert single digits.
  - `floor_icon_size` rounds a pixel size down to a standard icon size.
  - `make_path_long_compatible` adds the `\\?\` long-path prefix.
  - `Version(major, minor, patch)` holds 16-bit parts. It can be compared, and `as_number()` packs it into one integer.
- `hashtab.b64`
  - `encode(data)` produces padded standard base64.
  - `decode(text)` is lenient. It accepts the standard and URL-safe alphabets, with or without padding, and never raises.
- `hashtab.sumfile` reads checksum files:
  - hex lines (`hash  name` or `hash *name`)
  - base64 lines
  - SFV lines (`name CRC32`)
  - `#` or `;` comments
  - files that hold only one bare hash, which gives a single `FileSum` with an empty name

  `parse_sum_file(data, max_hash_size)` works on bytes. `try_parse_sum_file(path, max_hash_size)` reads a file and raises `OSError` if it cannot be read. Both return an empty list when the input is not a sumfile. `SumFileParser.process_line` parses line by line. It locks onto the first comment style and the first hash style it sees.
- `hashtab.settings`
  - `Settings` exposes every preference as an attribute with its default. Assigning the attribute changes it for the session only. `Settings.set(name, value)` also saves it.
  - `is_algorithm_enabled` and `set_algorithm` handle the per-algorithm switches. MD5, SHA-1, SHA-256 and SHA-512 are on by default.
  - Values live in a `SettingsStore`, which is in memory, or a JSON file when given a path.
  - `rgb(r, g, b)` packs a color as `0x00BBGGRR`.
- `hashtab.hash_colors`
  - `HashColorType` is ERROR, MATCH, INSECURE, MISMATCH or UNKNOWN.
  - `color_setting_for(kind)` names the settings behind each type.
  - `colors_for(settings, kind)` returns `(foreground, background)`. A color is `None` where it is disabled.
  - `format_color` renders `#RRGGBB`.
  - `CUSTOM_COLORS` is a preset palette.
- `hashtab.path`
  - `process_everything(paths, settings, algorithms)` turns a selection of paths into a `ProcessedFileList`. This holds `sumfile_type`, `base_path` and `files`, a mapping of normalized path to `FileInfo`.
  - It works out the common base directory and expands directories recursively, skipping symbolic links.
  - A single path that is a sumfile is expanded into the files it lists.
  - When `look_for_sumfiles` is on, it reads companion sumfiles such as `file.sha256`.
  - `algorithms` maps algorithm names to their sumfile extensions.
  - `normalize_path` makes a path absolute.
- `hashtab.https`
  - `do_https(HTTPRequest(...))` performs one blocking request on port 443 and returns an `HTTPResult` with `http_code` and `body`.
  - Any HTTP status is returned. Transport failures raise `HTTPSError`.
- `hashtab.updatecheck`
  - `parse_tags_reply(body)` reads a `vX.Y.Z` version from the first entry of a JSON tag list.
  - `get_latest_version(fetch=None)` requests that list.
  - Both raise `UpdateCheckError` on failure.
- `hashtab.virustotal`
  - `check_for_tos(settings, ask)` makes sure the terms were accepted and remembers the answer.
  - `build_query(files)` builds the JSON request from `FileReport` entries, skipping files with a nonzero `error`.
  - `parse_reply(body, files)` matches the reply to the files as `Result` entries.
  - `query(files, api_key, user_agent, fetch=None)` does the request.
  - Failures raise `VirusTotalError`.

The network functions take an optional `fetch` callable in place of `do_https`, so they can be used with any transport.

## Install

```
pip install .
```

## Example

```python
from hashtab.sumfile import parse_sum_file
from hashtab.utl import hash_bytes_to_string

entries = parse_sum_file(b"d41d8cd98f00b204e9800998ecf8427e  empty.txt\n", 64)
for name, digest in entries:
    print(name, hash_bytes_to_string(digest, upper=False))
```

```python
from hashtab.virustotal import FileReport, build_query

print(build_query([FileReport("C:\\tmp\\a.txt", bytes(16))]))
```

## What it does not do

This is a library only. It has:

- no command-line program
- no windows or dialogs
- no code that computes file hashes itself

`process_everything` decides what to hash and what to expect. It does not do the hashing.

The settings are kept in memory, or in a JSON file you name. Nothing is stored anywhere else.

## Tests

```
pip install .[test]
pytest
```