# peekstream

Building blocks for handling security-exercise telemetry:

- data models for events, assets, network segments and MITRE ATT&CK techniques,
- parsers for CEF and Snoopy log payloads and for common timestamp and IP fields,
- time intervals and equal-width time bins,
- exercise inventory records fetched from a Providentia-style API,
- indicators of compromise rendered as Suricata rules,
- a WSGI "oracle" application that serves assets and indicators over HTTP.

## Installation

```
pip install .
```

The only runtime dependency is `werkzeug`, used by the web application.
To run the test suite:

```
pip install .[test]
pytest
```

## Modules

| Module | Contents |
| ------ | -------- |
| `peekstream.errors` | shared error types, including `ErrChan`, a bounded thread-safe error buffer (`send`, `drain`) |
| `peekstream.interval` | `Interval`, `interval_from_strings` and overlap checks such as `interval_in_range` |
| `peekstream.timebin` | `TimeBin`, equal-width buckets over an interval |
| `peekstream.fields` | `parse_string_ip`, `parse_cidr_network`, `parse_cidr_address`, `parse_quoted_rfc3339`, `format_quoted_rfc3339`, `AssetVcenter` |
| `peekstream.meta_asset` | `Asset`, `RawAsset` |
| `peekstream.meta_mitre` | `Technique`, `MitreAttack` |
| `peekstream.meta` | `Directionality`, `EventData`, `GameAsset` |
| `peekstream.meta_network` | `Network`, `NetSegment`, `networks_from_pandas` |
| `peekstream.atomic_cef` | `Cef`, `parse_cef`, `CefParseError` |
| `peekstream.atomic_snoopy` | `Snoopy`, `SnoopySSH`, `parse_snoopy`, `SnoopyParseError` |
| `peekstream.events` | `Atomic` event kinds, `new_atomic`, `get_field`, `get_dot_field`, `try_fix_broken_message`, `Simple`, `KnownTimeStamps` |
| `peekstream.consumer` | `Message`, `Source`, `Offsets`, `Parser`, `parser_from_name`, `ParseMapping` |
| `peekstream.providentia` | `Target`, `Instance`, `Record`, `Params`, `pull`, `parse_targets`, `filter_by_time` |
| `peekstream.ioc` | `IoC` and its validation errors |
| `peekstream.oracle_store` | `IoCStore`, `AssetStore` |
| `peekstream.oracle_app` | `OracleApp`, the WSGI application |

## Parsing log payloads

```python
from peekstream.atomic_cef import parse_cef
from peekstream.atomic_snoopy import parse_snoopy

cef = parse_cef("CEF:0|Vendor|Product|1.0|100|Login|5|src=10.0.0.1 dst=10.0.0.2")
print(cef.source(), cef.extensions)   # Product {'src': '10.0.0.1', 'dst': '10.0.0.2'}

cmd = parse_snoopy("[uid:0 sid:1 tty:(none) cwd:/root filename:/bin/ls]: ls -la")
print(cmd.uid, cmd.cwd, cmd.filename)
```

`parse_cef` raises `CefParseError` when the header does not have eight
`|`-separated parts or the extension list is empty (the partial result is kept
on the error's `cef` attribute). `parse_snoopy` accepts both the default
five-field layout and the extended ten-field layout with SSH connection
details, and raises `SnoopyParseError` otherwise.

`peekstream.events.get_dot_field("alert.signature_id", doc)` walks nested
dictionaries and returns a `(value, found)` pair.

## Time intervals and bins

```python
from datetime import timedelta
from peekstream.interval import interval_from_strings, interval_in_range
from peekstream.timebin import TimeBin

fmt = "%Y-%m-%d %H:%M:%S"
window = interval_from_strings("2019-07-19 07:30:53", "2019-07-19 10:15:10", fmt)
hour = interval_from_strings("2019-07-19 07:01:43", "2019-07-19 08:01:43", fmt)
assert interval_in_range(hour, window)

bins = TimeBin(window, timedelta(minutes=15))
print(bins.count, bins.locate(hour.end))
```

An interval whose end precedes its beginning raises `InvalidIntervalError`.

## Event metadata

`GameAsset.set_direction()` classifies an event as local, inbound, outbound
or lateral from whether its source and destination assets are exercise assets
(`Asset.is_asset`). `MitreAttack.update()` deduplicates techniques by ID and
`MitreAttack.set(mapping)` fills in names, URLs and phases from a table keyed
by technique ID. `GameAsset.to_json()` serialises the whole structure.

## Inventory records

```python
from peekstream.providentia import Params, pull

targets = pull(Params(url="https://inventory.example.com/api/targets", token="token"))
for target in targets:
    print(target.role, target.extract_os(), len(target.instances))
```

`pull` sends the token as the `Authorization` header and, when
`Params.raw_dump` is set, writes the raw response body to that file.
`parse_targets` decodes a response body you already have. `Record` describes
one address of an instance; `Record.to_asset()` turns it into an `Asset` and
`filter_by_time(records, since)` keeps recently updated ones.

## Indicators of compromise

```python
from peekstream.ioc import IoC
from peekstream.oracle_store import IoCStore

store = IoCStore()
ioc_id = store.add(IoC(type="dest_ip", value="203.0.113.7"), keep_id=False)
store.disable(ioc_id)
for item in store.extract():
    print(item.rule())
```

Supported types are `src_ip`, `dest_ip`, `tls.ja3.hash`, `tls.ja3s.hash`,
`tls.sni` and `http.hostname`; other types raise `UnsupportedIoCTypeError`.
Each type and value pair is stored once. Disabled indicators are rendered as
commented-out rules, and a `tls.ja3.hash` indicator yields two rules, one per
direction.

## The oracle web application

`peekstream.oracle_app.OracleApp` is a WSGI application over an `IoCStore`
and an `AssetStore`, so any WSGI server can host it:

```python
from werkzeug.serving import run_simple
from peekstream.oracle_app import OracleApp
from peekstream.oracle_store import AssetStore, IoCStore

app = OracleApp(IoCStore(), AssetStore())
run_simple("127.0.0.1", 8080, app)
```

Routes:

| Method | Path | Purpose |
| ------ | ---- | ------- |
| GET | `/` | route listing |
| GET | `/assets` | asset records as JSON (`?format=arkime` for an Arkime WISE file) |
| GET | `/ioc` | JSON list of indicators |
| POST | `/ioc` | add an indicator (fields `type` and `value`) |
| DELETE | `/ioc/{id}` | disable an indicator |
| PUT | `/ioc/{id}` | enable an indicator |
| GET | `/ioc/rules` | Suricata rules for all indicators, one per line |

Assets are loaded with `AssetStore.update(records)`, a mapping of name to
`Record`; an empty mapping leaves the current records in place.

## What this package does not do

- It does not parse RFC 5424 syslog frames, listen for syslog over UDP, or
  turn syslog payloads into the event models above; callers parse the message
  part themselves with `parse_cef` or `parse_snoopy`.
- It has no models for Windows event logs, Suricata EVE records or Zeek
  output beyond the dictionary helpers in `peekstream.events`.
- It does not ship events anywhere: there are no Kafka, Elasticsearch or file
  outputs, and no persistent storage for the indicator or asset stores.
- The oracle serves no Suricata SID to MITRE mapping routes.
- There is no command-line program; the web application must be hosted by a
  WSGI server of your choice.