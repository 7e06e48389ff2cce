# weatherchain

weatherchain records readings from IoT weather sensors in a small hash-linked
chain of blocks and in an SQLite database, and answers the questions a weather
dashboard asks of that data: the latest reading per location, time series for
charts, and the full block and data history.

It uses only the Python standard library. BLAKE3 (for block hashes) and
ChaCha20 (for sensor payloads) are implemented in pure Python.

## Modules

| Module | Purpose |
| --- | --- |
| `weatherchain.chacha20` | `ChaCha20` stream cipher; `xor` both encrypts and decrypts |
| `weatherchain.blake3` | `Blake3` hasher: plain, keyed, `derive_key`, extendable output via `digest(length, seek)` |
| `weatherchain.hashing` | `blake3_hash(data)`, the 32-byte digest used for blocks |
| `weatherchain.transaction` | `Transaction`, `add_transaction`, `InvalidTransactionError`, `TransactionLimitError` |
| `weatherchain.block` | `Block` and `create_block(index, previous_hash)` |
| `weatherchain.blockchain` | `Blockchain`: append, iterate, `len`, `verify`, `format` |
| `weatherchain.logger` | `Logger` writing timestamped lines at a `LogLevel` |
| `weatherchain.utils` | saving and loading chains as text, random bytes, payload encryption and formatting |
| `weatherchain.database` | `Database` over SQLite with `blocks`, `transactions` and `data` tables; `decode_sensor_payload` |
| `weatherchain.server` | `BlockchainServer`, which records readings handed to it |
| `weatherchain.analytics` | `PlotType` and `fetch_series` for chart data |
| `weatherchain.history` | `BlockHistoryRow`, `DataHistoryRow` and the queries that return them |
| `weatherchain.dashboard` | `latest_readings`, `SensorSnapshot` and a `Dashboard` of fixed slots |
| `weatherchain.theme` | light/dark `Theme` read from an INI file, `ColorParams`, `parse_color` |
| `weatherchain.settings` | application `Settings` read from an INI file, with defaults |
| `weatherchain.navigation` | `Navigator`, `MenuItem` and `Page`: the menu model that maps buttons to pages |

## Sensor payloads

A sensor sends eight numbers joined by `|`:

```
latitude|longitude|temperature|humidity|co2|no2|o3|pressure
```

`format_sensor_payload` builds those bytes, each number taken as an unsigned
32-bit value. Payloads are encrypted with ChaCha20 (32-byte key, 12-byte
nonce, starting counter). `encrypt_data` and `decrypt_data` both just run the
cipher's keystream over the data, so each direction needs a fresh `ChaCha20`.

```python
from weatherchain.chacha20 import ChaCha20
from weatherchain.utils import decrypt_data, encrypt_data, format_sensor_payload, generate_random_bytes

key = generate_random_bytes(32)
nonce = bytes(12)

payload = format_sensor_payload(12345678, 98765432, 25, 60, 450, 20, 30, 1013)
sealed = encrypt_data(ChaCha20(key, nonce, 0), payload)
assert decrypt_data(ChaCha20(key, nonce, 0), sealed) == payload
```

The database decrypts stored payloads with the fixed `PAYLOAD_KEY` and
`PAYLOAD_NONCE` from `weatherchain.database`. `decode_sensor_payload(data)`
decrypts with them and splits the text into the eight `data` columns in the
order latitude, longitude, temperature, humidity, pressure, co2, no2, o3.
Empty fields are skipped and missing columns come back as `None`.

## Building a chain

```python
from weatherchain.block import create_block
from weatherchain.blockchain import Blockchain

chain = Blockchain()
genesis = create_block(0, "0" * 64)
chain.add_block(genesis)
print(chain.verify())          # True

genesis.add_transaction("Alice", 1, "Hello, Bob!")
print(len(chain))
print(chain.format())
print(chain.verify())          # False
```

A block's hash is BLAKE3 over its index and the previous hash, written as 64
lowercase hex digits. `Block.verify` recomputes the hash over the index, the
previous hash and all transactions, so a block verifies only while it holds no
transactions.

Each block holds at most 100 transactions. Sender and data are cut to 49 and
255 bytes. A transaction needs a non-empty sender, a positive timestamp and
non-empty data, otherwise `InvalidTransactionError` is raised; a full block
raises `TransactionLimitError`.

`save_blockchain(chain, path)` writes a chain as text and
`load_blockchain(path)` reads it back; the previous hash is not read back and
every loaded block carries `"0"`.

## Recording readings

```python
from weatherchain.chacha20 import ChaCha20
from weatherchain.database import PAYLOAD_KEY, PAYLOAD_NONCE, Database
from weatherchain.logger import Logger
from weatherchain.server import BlockchainServer
from weatherchain.utils import encrypt_data, format_sensor_payload

logger = Logger()
logger.set_log_file("server.log")

payload = format_sensor_payload(12345678, 98765432, 25, 60, 450, 20, 30, 1013)
sealed = encrypt_data(ChaCha20(PAYLOAD_KEY, PAYLOAD_NONCE, 0), payload)

with Database("blockchain.db") as database:
    server = BlockchainServer(database, logger)
    server.record_sensor_data("sensor_data1/12345678/98765432", 1700000000000, sealed)

logger.close()
```

`BlockchainServer` starts its chain with a genesis block and creates the
database tables. `record_sensor_data` logs the reading, appends a block with
one transaction, and stores the block, the transaction and the decoded reading.
The logger must have a file open; otherwise `Logger.log` raises
`LoggerNotOpenError`.

`poll(retrieve, urls)` calls `retrieve(url)` for each URL (by default
`DEFAULT_URLS`); `retrieve` returns `(timestamp, data)` or `None`, and the
number of readings recorded is returned. `run(retrieve, urls, interval,
rounds)` repeats that every `interval` seconds, forever when `rounds` is
`None`, then prints the chain and whether it is valid, and returns that.

## Querying

All query functions take an open `sqlite3` connection.

```python
import sqlite3

from weatherchain.analytics import PlotType, fetch_series
from weatherchain.dashboard import Dashboard, latest_readings
from weatherchain.history import fetch_block_history, fetch_data_history, fetch_data_history_at

connection = sqlite3.connect("blockchain.db")

series = fetch_series(connection, PlotType.TEMPERATURE)   # {"lat,lon": [(timestamp, value), ...]}
for row in fetch_block_history(connection):
    print(row.block_index, row.sender, row.data_size, row.recorded_at)
for row in fetch_data_history(connection):
    print(row.location, row.temperature)
rows = fetch_data_history_at(connection, "12345678, 98765432")

for snapshot in latest_readings(connection):
    print(snapshot.labels())

dashboard = Dashboard(connection, 5)
print(dashboard.refresh())
```

`fetch_series` reads at most 300 rows, newest first, and skips rows whose
location or value is not numeric. `fetch_data_history_at` takes a location
written as `"latitude, longitude"`; `split_location` parses that form and
raises `ValueError` for anything else. A `Dashboard` slot keeps its last labels
when a refresh brings fewer locations than there are slots.

## Themes, settings and navigation

`Theme(path)` and `Settings(path)` read INI files and fall back to built-in
defaults for any missing key. `Theme.toggle()` switches between the `light`
and `dark` sections; `Theme.palette()`, `Theme.color(name)` and
`Theme.color_params()` return the current theme's colours as `#rrggbb`
strings. `Settings` exposes properties such as `app_name`, `startup_size` and
`font_family`.

`Navigator(settings, theme)` holds the left-menu items and the current page:
`click(button_id)` selects a page and title (or opens the `"about"` dialog)
and returns `False` for an unknown button, `select_only_one(button_id)` marks
a single menu item active, `toggle_menu()` expands or collapses the menu, and
`toggle_theme()` switches the theme and reloads the palette.

## What the package does not do

- It has no command-line program and no graphical window; `Navigator`,
  `Dashboard` and the query functions hold the state and data a user
  interface would show.
- It does not talk to sensors over the network. Readings reach
  `BlockchainServer` only through `record_sensor_data` or the `retrieve`
  callable given to `poll` and `run`.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.