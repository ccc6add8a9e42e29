# subpar

subpar keeps a picture of a subway system in memory and answers questions
about it over HTTP as JSON:

- which trains are about to arrive at a station complex,
- which elevators and escalators a complex has, and which are out of service,
- which complexes currently have an outage at all.

Station complexes, entrances, equipment and outages are loaded from JSON
records. Train data is merged in from batches of real-time feed updates
(trip schedules and vehicle positions) that the caller supplies.

## Installing

```
pip install .
```

The package uses nothing outside the Python standard library. To run the
tests, install the `test` extra and run `pytest`.

## Running the service

The `subpar` command loads four JSON files, each a list of records, and
starts a WSGI server (from `wsgiref`), listening on `0.0.0.0:3000` by default:

```
subpar --complexes complexes.json --equipment equipment.json \
       --outages outages.json --entrances entrances.json
```

Options:

| Option            | Meaning                                              |
|-------------------|------------------------------------------------------|
| `--complexes`     | JSON file of station complexes (required)            |
| `--equipment`     | JSON file of elevators and escalators (required)     |
| `--outages`       | JSON file of equipment outages (required)            |
| `--entrances`     | JSON file of subway entrances (required)             |
| `--host`          | address to listen on, default `0.0.0.0`              |
| `--port`          | port to listen on, default `3000`                    |
| `--ui-dir`        | directory of page files, default `ui`                |
| `--allow-origin`  | origin sent in `Access-Control-Allow-Origin`         |

If a file cannot be read or parsed, the command prints an error and exits
with status 1. `subpar --help` lists the options.

### Record fields

- complexes: `complex_id`, `stop_name`, `ada`, `ada_notes` (optional),
  `latitude`, `longitude`, `routes`, `stop_ids`
- equipment: `equipmentno`, `complex_id`, `equipmenttype` (`"ES"` marks an
  escalator), `isactive`, `ada`, `serving`, `linesservedbyelevator`,
  `shortdescription`, `busconnections`, `alternativeroute`
- outages: `equipment`, `outagedate`, `ada`, `estimatedreturntoservice`,
  `reason`, `isupcomingoutage`, `ismaintenanceoutage`
  (dates in ISO 8601 form)
- entrances: `complex_id`; every other field is passed through unchanged

Complex ids in URLs are read as integers, so `complex_id` values in the
records should be JSON integers for the lookups to match.

## HTTP endpoints

Only `GET` and `HEAD` are answered; other methods get `405`.

| Path                   | Returns                                                    |
|------------------------|------------------------------------------------------------|
| `/upcoming/<id>`       | upcoming arrivals at complex `<id>`, soonest first         |
| `/elevators/<id>`      | elevators and escalators of complex `<id>`, with outages   |
| `/elevators_overview`  | `{"outages": [...]}`, ids of complexes with an outage      |
| `/complex/<id>`        | station details, upcoming arrivals and elevators together  |
| `/c/<id>`              | `index.html` from the UI directory                         |
| `/f/<name>`            | the file `<name>` from the UI directory, as text           |
| `/favicon.ico`         | `elevator4.svg` from the UI directory                      |
| `/hello`               | the text `hell world`                                      |

An unknown complex id gives `404` with the message
`complex '<id>' not found`; an id that is not a number gives `400`. File
names under `/f/` that start with `..` or hold a path separator are refused
with `400`.

## Using it from Python

```python
from subpar.states import States
from subpar.web import WebApp, serve

states = States(complexes, elevators, outages, entrances)

full = states.get_full(611)          # a ComplexFull, or None
if full is not None:
    print(full.to_json())

# merge a decoded real-time feed message
from subpar.gtfs import parse_batch
states.trains.update(parse_batch(feed_message))

# refresh outages
states.elevators.update(new_outage_records)

# WebApp is a plain WSGI application
app = WebApp(states, "ui")
serve(states, "0.0.0.0", 3000, "ui")
```

`subpar.cli.load_states` builds a `States` from the four JSON files that the
command line reads.

`subpar.gtfs.parse_batch` takes an object with the interface of a
protobuf `FeedMessage` generated from `gtfs-realtime.proto` (presence via
`HasField`, fields as attributes). Entities that fail to decode are kept in
the `Batch` as `GtfsParseError` values; only schedules are used for arrivals.

On every train update, arrival records whose feed time is 45 seconds or more
in the past are dropped. The outage summary is cached and recomputed only
after outages change.

## What it does not do

- It does not fetch real-time feeds or outage lists over the network. The
  `subpar` command serves only the data in the files it is given: no train
  updates reach it, so `/upcoming/<id>` and `/complex/<id>` answer `404`
  until arrivals are merged in with `TrainStates.update` from Python.
- It does not ship protobuf bindings for GTFS-realtime; the caller decodes
  feed bytes into message objects before passing them to `subpar.gtfs`.