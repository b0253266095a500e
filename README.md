# shimectl

`shimectl` talks to a running desktop mascot simulator through the HTTP API
that it serves on `127.0.0.1:32456`. From the command line it lists, spawns,
alters and dismisses mascots.

## Installation

```
pip install .
```

## Usage

```
shimectl [--quiet] <command> [options...]
```

`--quiet`, given before the command, discards all output. Only the exit status
is left.

Commands:

- `list` shows the mascots that are active now: ID, name, data ID, active
  behavior and anchor.
  - `--json` prints the API response unchanged.
  - `--selector CODE` passes a JavaScript filter to the server.
- `list-loaded` shows the mascot templates that can be spawned, as `[id] name`.
  - `--json` prints the API response unchanged.
  - `--sort-by-id` sorts the output by ID. It cannot be combined with `--json`.
- `spawn` creates a new mascot. Give exactly one of `--name NAME` or
  `--data-id N`.
  - `--behavior B` may be repeated. One of the given behaviors is picked at random.
  - `--x X --y Y` set the starting position. Both must be given, or neither.
  - `--json` prints the API response in place of the mascot description.
- `alter --id ID` changes a mascot that already exists. It accepts `--behavior`,
  `--x`, `--y` and `--json`, which work as they do for `spawn`. It also accepts
  `--selector`, which may be repeated.
- `dismiss --id ID` removes one mascot. It also accepts one `--selector`.
- `dismiss-all` removes every mascot, or only those that `--selector` matches.

`--id` takes a number that is 0 or greater, or one of the words `oldest`,
`newest` or `random`. A word is looked up in the current list of mascots. When
selectors are given they are tried in turn, and the first selector that matches
any mascot decides the ID. A numeric ID cannot be combined with a selector.

If the command line does not match a command's options, the command prints its
usage text. Every failure exits with status 1.

Examples:

```
shimectl spawn --name Shimeji --behavior Fall --x 400 --y 0
shimectl list --selector "mascot.name == 'Shimeji'"
shimectl alter --id newest --behavior SitDown
shimectl dismiss --id oldest
shimectl dismiss-all
```

If the simulator cannot be reached, the command prints
`Request failed. Is the mascot server running?` and exits with status 1.

## Library use

- `shimectl.cli.ApiClient` wraps the API endpoints: `list_mascots`,
  `loaded_mascots`, `spawn`, `alter`, `dismiss` and `dismiss_all`. Each one
  returns an `ApiReply`, which holds the raw body and the decoded object. Each
  one raises `ApiError` when the server cannot be reached or reports an error.
  `shimectl.cli.run(argv, out, err)` runs one command with the given streams.
- `shimectl.args.OptionParser` is the `--name value` option parser that the
  commands use. It is built from `Option` entries typed by `ArgType`, and it
  raises `UsageError` on a bad command line.
- `shimectl.environment.Environment.update` works out the screen, floor, work
  area, ceiling, active-window area and cursor that a mascot moves in. It uses
  the screen and available geometry (`Rect`) and the focused window
  (`ActiveWindow`).
- `shimectl.formatting` formats numbers, points, areas and `#RRGGBB` colours.
- `shimectl.catalog` holds naming rules for mascot folders and breed requests,
  and builds the delete confirmation and import summary messages.

## What it does not do

`shimectl` is only a client. It does not run the simulator, draw or animate
mascots, import mascot archives or serve the HTTP API. A simulator that is
already running and listening on `127.0.0.1:32456` is needed for every command.