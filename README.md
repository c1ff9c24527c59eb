# pandemic

A turn-based strategy game for four AI players. Each player controls a squad
of units on a square board of grass, walls, cities and the paths that join
them. Units move one cell per round. A unit that moves onto an enemy unit
attacks it, and an enemy brought below zero health is converted to the
attacker's side. Players score points by holding cities and paths, and by
linking the cities they own into connected networks. Meanwhile a virus spreads
from infected units, drifts across the board and wears down the health of any
unit that catches it. Masks appear on the grass every few rounds and give
some protection.

All randomness comes from a small seeded generator
(`pandemic.rng.RandomGenerator`), so the same seed, configuration and players
always give the same game.

## Installation

```
pip install .
```

## Playing a match

```
pandemic --seed 1 --input game.cnf --output game.out Demo Demo Null PedroSanchez
```

Exactly four player names must be given, each at most 12 characters long.
The seed is required and must not be negative.

| Option | Short | Meaning |
| --- | --- | --- |
| `--seed SEED` | `-s` | random seed (required) |
| `--input FILE` | `-i` | configuration file (default: standard input) |
| `--output FILE` | `-o` | replay file (default: standard output) |
| `--list` | `-l` | list registered players |
| `--version` | `-v` | print the game version |
| `--help` | `-h` | print help |

Running `pandemic` with no arguments prints the help text. Progress messages,
warnings and the final scores are written to standard error. Errors in the
input or the arguments are reported as `error: ...`, and the exit status is 1.

### Configuration

The configuration starts with the game version and the settings, one per line.
It ends with a board generator line:

```
Pandemic 1.0
nb_players                  4
rows                        60
cols                        60
nb_rounds                   200
initial_health              100
nb_units                    20
bonus_per_city_cell         1
bonus_per_path_cell         1
factor_connected_component  2
infection_factor            20
mask_protection             3
GENERATOR1
```

The settings must satisfy these rules:

- `nb_players` must be 4.
- The board must be square, with at least 20 rows.
- `rows * cols` must be at least `25 * nb_players * nb_units`.
- The other integer settings must be positive.

`GENERATOR1` builds a random map from the seed. `FIXED` is followed by a board
written in the same layout as the states in a replay: the grid, then the
`cities`, `paths` and `masks` sections.

### The replay

The replay begins with `Game`, the seed, the settings, the player names and the
initial state. Each round then adds a `commands` block, which lists the moves
that were actually carried out and ends with `-1`, followed by the new state.
A state holds the following:

- the grid, where virus levels are drawn as letters and digits;
- the cities, paths and masks;
- the round;
- the total scores;
- the status of each player;
- the owners of the cities and paths;
- one line per unit: its player, position, health, damage, turns infected,
  whether it is immune and whether it wears a mask.

## Bundled players

- `Null`: gives no orders.
- `Demo`: shows the player interface with mostly random moves. It stops moving
  after half the rounds, or whenever it is strictly ahead on score.
- `PedroSanchez`: uses breadth-first searches for each unit. A unit attacks an
  adjacent enemy first. If it is not immune, it next picks up an adjacent mask.
  Failing that, it chases a weak enemy within three steps. Otherwise it heads
  for the nearest city or path that the player does not own.

## Writing a player

Subclass `pandemic.player.Player`, implement `play()`, and register the class
under a name with `pandemic.registry.register_player`:

```python
from pandemic.player import Player
from pandemic.registry import register_player
from pandemic.structs import Dir


@register_player("Cautious")
class CautiousPlayer(Player):
    def play(self):
        for unit_id in self.my_units(self.me()):
            self.move(unit_id, Dir.NONE)
```

Inside `play()` a player sees a copy of the board. It can use these methods:
`cell(pos)`, `unit(unit_id)`, `city(city_id)`, `path(path_id)`,
`city_owner(city_id)`, `path_owner(path_id)`, `total_score(pl)`, `status(pl)`,
`my_units(pl)`, `nb_cities()`, `nb_paths()` and `total_units()`. It can also
read the `round` attribute and the fixed `settings`. A player has its own seeded
`random(low, high)` and `random_permutation(n)`, and gives orders with
`move(unit_id, direction)`. Each unit takes at most one order per round. A
second order for the same unit is ignored with a warning, and more than 1000
orders in a round raise `pandemic.structs.GameError`. The board carries out all
orders in a random order.

The `pandemic` command knows only the bundled players. To use your own player,
import the module that registers it and call
`pandemic.game.run(names, instream, outstream, seed)` yourself, or call
`pandemic.cli.main([...])` from a script that has imported it.

## What it does not do

The package has no viewer for replays; a replay is plain text only. Players
run in the same process, one after another, with no time limit. Every
player's `status` therefore stays at 0 for the whole game.

## Running the tests

```
pip install .[test]
pytest
```