"""Pause, resume and speed up -- the basics of tick-pausable.

Demonstrates:
- Creating a Timeline driven by a manual clock
- A counted timer with an on_end callback
- A back-and-forth transition on a plain object
- Pausing everything, changing speed, and resuming

Run: python examples/basics.py
"""

from dataclasses import dataclass

from tick_pausable import FAST, ManualClock, Timeline


@dataclass
class Ball:
    x: float = 0.0


def main() -> None:
    print("=== Basics ===\n")

    tl = Timeline(clock=ManualClock())
    ball = Ball()

    tl.new_timer(
        1000,
        lambda e: print(f"  [{e.time:6.0f} ms] tick {e.count}  x={ball.x:.1f}"),
        4,
        name="Tick Timer",
        on_end=lambda e: print(f"  [{e.time:6.0f} ms] {e.name} has completed"),
    )
    tl.new_transition(
        ball,
        time=1000,
        x=480.0,
        cycle=4,
        back_and_forth=True,
        name="Slide",
        on_end=lambda obj, e: print(f"  {e.name} has completed at x={obj.x:.1f}"),
    )

    # Play 1.5 seconds at normal speed.
    tl.advance(1500, step=50)

    print("\n  -- paused for 10 s --")
    tl.pause_all()
    tl.advance(10_000, step=50)

    # Twice as fast from here on.
    tl.speed = FAST
    tl.resume_all()
    print("  -- resumed at FAST --\n")
    tl.advance(2000, step=50)

    print(f"\nDone at {tl.now():.0f} ms; swept {tl.cleanup()} finished handles.")


if __name__ == "__main__":
    main()
