# philo

A simulation of the dining philosophers problem. Each philosopher runs in its
own thread. Each one shares a fork, which is a lock, with each neighbour at a
round table. A monitor watches for starvation and stops the simulation when a
philosopher has gone `time_to_die` milliseconds without starting a meal. If a
meal quota is given, the monitor also stops the simulation once every
philosopher has eaten that many times.

## Installation

```
pip install .
```

## Usage

```
philo number_of_philosophers time_to_die time_to_eat time_to_sleep [must_eat]
```

You can also start it with `python -m philo.cli` and the same arguments.

All times are in milliseconds. Every argument must be a strictly positive
integer. Leading whitespace and one `+` or `-` sign are accepted. Anything
after the digits is rejected. When the number of arguments is wrong, the
program prints `Usage: ./philo nbr die eat sleep [must_eat]` and exits with
status 1. When an argument is invalid, it prints
`These are not the args you were looking for` and exits with status 1. When
the simulation ends normally, the exit status is 0.

Example:

```
philo 5 800 200 200 7
```

Each event is printed on its own line. A line gives the milliseconds since
the start, the philosopher's number (counting from 1) and the event:

```
<ms> <id> has taken a fork
<ms> <id> is eating
<ms> <id> is sleeping
<ms> <id> is thinking
<ms> <id> died
```

Even-numbered philosophers start by sleeping and then thinking. This staggers
their turns at the table. The last philosopher, when its number is odd, starts
by thinking. After that, every philosopher repeats the same cycle: take both
forks, eat, sleep, think. Once the simulation has stopped, no further events
are printed. The `died` line is the last line printed.

A table with a single philosopher has only one fork. That philosopher picks it
up, waits `time_to_die` milliseconds, and dies.

## Library use

```python
import sys

from philo.args import parse_args
from philo.table import Simulation

settings = parse_args(["4", "410", "200", "200", "3"])
Simulation(settings, sys.stdout).run()
```

- `philo.args.parse_args` takes the arguments that follow the program name and
  returns a frozen `Settings` dataclass. `Settings` has the fields
  `num_philos`, `time_to_die`, `time_to_eat`, `time_to_sleep` and `must_eat`.
  `must_eat` is `None` when no meal target was given.
- `parse_args` raises `UsageError` when the number of arguments is not 4 or 5.
  It raises `InvalidArgumentError`, a subclass of `UsageError`, when an
  argument is not a positive integer.
- `philo.args.parse_int` applies the same strict integer rules to a single
  string. It raises `ValueError` on malformed input and truncates the result
  to a 32-bit signed integer.
- `philo.table.Simulation(settings, out)` writes its log lines to `out`, or to
  standard output when `out` is `None`. `run()` blocks until the simulation
  stops. The pieces can also be driven one at a time:
  - `stopped()` and `stop()` read and set the stop state.
  - `take_forks`, `eat` and `sleep_think` perform a philosopher's actions.
  - `check_death`, `all_fed` and `status` are the monitor's checks.
- `philo.table.now_ms()` returns the wall-clock time in milliseconds.

## Tests

```
pip install ".[test]"
pytest
```