"""The dining table: philosophers, forks and the monitor that watches them."""

from __future__ import annotations

import sys
import threading
import time
from dataclasses import dataclass, field
from typing import TextIO

from philo.args import Settings

_MONITOR_POLL_S = 0.0001


def now_ms() -> int:
    """Return the current wall-clock time in milliseconds."""
    return time.time_ns() // 1_000_000


@dataclass(eq=False)
class Philosopher:
    """One seat at the table and the two forks it reaches for."""

    id: int
    left_fork: threading.Lock = field(repr=False)
    right_fork: threading.Lock = field(repr=False)
    last_meal: int = 0
    meals_eaten: int = 0
    thread: threading.Thread | None = field(default=None, repr=False)


class Simulation:
    """Runs the dining philosophers and reports what each one does."""

    def __init__(self, settings: Settings, out: TextIO | None = None) -> None:
        self.settings = settings
        self._out = out if out is not None else sys.stdout
        self.start_time = now_ms()
        self._stop = False
        self._write_lock = threading.Lock()
        self._stop_lock = threading.Lock()
        self._meal_lock = threading.Lock()
        count = settings.num_philos
        self.forks = [threading.Lock() for _ in range(count)]
        self.philosophers = [
            Philosopher(
                id=seat + 1,
                left_fork=self.forks[seat],
                right_fork=self.forks[(seat + 1) % count],
                last_meal=now_ms(),
            )
            for seat in range(count)
        ]

    def stopped(self) -> bool:
        """Tell whether the simulation has been stopped."""
        with self._stop_lock:
            return self._stop

    def stop(self) -> None:
        """Stop the simulation."""
        with self._stop_lock:
            self._stop = True

    def _write(self, line: str) -> None:
        print(line, file=self._out, flush=True)

    def log(self, philo: Philosopher, message: str) -> None:
        """Print a timestamped action unless the simulation has stopped."""
        with self._write_lock:
            if not self.stopped():
                self._write(f"{now_ms() - self.start_time} {philo.id} {message}")

    def sleep(self, duration_ms: int) -> None:
        """Wait for ``duration_ms``, returning early if the simulation stops."""
        start = now_ms()
        while True:
            elapsed = now_ms() - start
            if elapsed >= duration_ms or self.stopped():
                return
            remaining = duration_ms - elapsed
            if remaining > 10:
                time.sleep(0.005)
            elif remaining > 2:
                time.sleep(0.001)
            else:
                time.sleep(0.0001)

    def take_forks(self, philo: Philosopher) -> bool:
        """Pick up both forks; on success they stay held by the caller."""
        philo.left_fork.acquire()
        if self.stopped():
            philo.left_fork.release()
            return False
        philo.right_fork.acquire()
        if self.stopped():
            philo.right_fork.release()
            philo.left_fork.release()
            return False
        self.log(philo, "has taken a fork")
        self.log(philo, "has taken a fork")
        return True

    def eat(self, philo: Philosopher) -> None:
        """Take the forks, eat for the configured time, then put them down."""
        if self.stopped() or not self.take_forks(philo):
            return
        try:
            with self._meal_lock:
                philo.last_meal = now_ms()
            self.log(philo, "is eating")
            self.sleep(self.settings.time_to_eat)
            with self._meal_lock:
                philo.meals_eaten += 1
        finally:
            philo.right_fork.release()
            philo.left_fork.release()

    def sleep_think(self, philo: Philosopher) -> None:
        """Sleep for the configured time, then start thinking."""
        if self.stopped():
            return
        self.log(philo, "is sleeping")
        self.sleep(self.settings.time_to_sleep)
        if self.stopped():
            return
        self.log(philo, "is thinking")

    def check_death(self, philo: Philosopher) -> bool:
        """Stop the simulation if ``philo`` has starved; True if stopped."""
        if self.stopped():
            return True
        with self._meal_lock:
            last_meal = philo.last_meal
        current = now_ms()
        if current - last_meal < self.settings.time_to_die:
            return False
        with self._stop_lock:
            already = self._stop
            self._stop = True
        if not already:
            with self._write_lock:
                self._write(f"{current - self.start_time} {philo.id} died")
        return True

    def all_fed(self) -> bool:
        """Stop the simulation once everyone has eaten enough; True if stopped."""
        if self.stopped():
            return True
        target = self.settings.must_eat
        if target is None:
            return False
        with self._meal_lock:
            if any(p.meals_eaten < target for p in self.philosophers):
                return False
        self.stop()
        return True

    def status(self) -> bool:
        """Check for a death or for everyone being fed; True if it must stop."""
        if self.stopped():
            return True
        if any(self.check_death(p) for p in self.philosophers):
            return True
        return self.settings.must_eat is not None and self.all_fed()

    def _solo(self, philo: Philosopher) -> None:
        with philo.left_fork:
            self.log(philo, "has taken a fork")
            self.sleep(self.settings.time_to_die)
            self.log(philo, "died")
        self.stop()

    def _routine(self, philo: Philosopher) -> None:
        if philo.id % 2 == 0 and not self.stopped():
            self.sleep_think(philo)
        elif philo.id == self.settings.num_philos and not self.stopped():
            self.log(philo, "is thinking")
        while not self.stopped():
            self.eat(philo)
            if self.stopped():
                break
            self.sleep_think(philo)

    def _monitor(self) -> None:
        while not self.stopped():
            if self.status():
                self.stop()
                break
            time.sleep(_MONITOR_POLL_S)
        for philo in self.philosophers:
            if philo.thread is not None:
                philo.thread.join()

    def run(self) -> None:
        """Run the simulation until someone dies or everyone has eaten enough."""
        if self.settings.num_philos == 1:
            self._solo(self.philosophers[0])
            return
        self.start_time = now_ms()
        started: list[Philosopher] = []
        for index, philo in enumerate(self.philosophers):
            philo.last_meal = self.start_time
            thread = threading.Thread(
                target=self._routine, args=(philo,), name=f"philo-{philo.id}", daemon=True
            )
            try:
                thread.start()
            except RuntimeError:
                self._write(f"Error creating thread for philo {index}")
                self.stop()
                for done in started:
                    if done.thread is not None:
                        done.thread.join()
                return
            philo.thread = thread
            started.append(philo)
        self._monitor()