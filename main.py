"""
main.py — Headless farm runner

1. Load tuning
2. Load the save slot (or start a new farm)
3. Step ``advance()`` at a fixed rate
4. Autosave on every new day and on exit

    python main.py --mode fixed --day-length 60 --seconds 600
    python main.py --export-terrain
"""

import argparse
import random
import time

from components import GameClock, Farmer, Creature, DevLog, Terrain
from core import tuning
from core.nbt import save_terrain_nbt
from core.save import load_farm, save_farm
from simulation.farm import advance, new_game


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Creature farm — headless simulation")
    p.add_argument("--slot", type=int, default=0, help="Save slot (default: 0)")
    p.add_argument("--new", action="store_true", help="Ignore the save and start fresh")
    p.add_argument("--mode", choices=("wall", "fixed"), default=None,
                   help="Clock mode (default: from tuning)")
    p.add_argument("--day-length", type=float, default=None,
                   help="Real seconds per day in fixed mode")
    p.add_argument("--tps", type=int, default=10, help="Steps per second (default: 10)")
    p.add_argument("--seconds", type=float, default=60.0,
                   help="Simulated seconds to run (default: 60)")
    p.add_argument("--realtime", action="store_true", help="Sleep between steps")
    p.add_argument("--seed", type=int, default=None, help="Random seed")
    p.add_argument("--tuning", type=str, default=None, help="Alternate tuning file")
    p.add_argument("--export-terrain", action="store_true",
                   help="Write the terrain as an NBT template and exit")
    return p.parse_args()


def _summary(world) -> str:
    clock = world.res(GameClock)
    farmer = world.res(Farmer)
    return (f"day {clock.day} {clock.hour:02d}h | ${farmer.money:.0f} "
            f"| energy {farmer.energy:.0f} | {world.count(Creature)} creatures")


def main() -> None:
    args = parse_args()
    if args.seed is not None:
        random.seed(args.seed)
    tuning.load(args.tuning)

    world = new_game(mode=args.mode) if args.new else load_farm(args.slot)
    clock = world.res(GameClock)
    if args.mode:
        clock.mode = args.mode
    if args.day_length:
        clock.day_length = args.day_length

    if args.export_terrain:
        save_terrain_nbt(world.res(Terrain))
        return

    dt = 1.0 / args.tps
    steps = int(args.seconds * args.tps)
    print(f"[FARM] Running {steps} steps ({_summary(world)})")
    try:
        for _ in range(steps):
            if advance(world, dt):
                print(f"[FARM] {_summary(world)}")
                save_farm(world, args.slot)
            if args.realtime:
                time.sleep(dt)
    except KeyboardInterrupt:
        print("[FARM] Interrupted")
    finally:
        save_farm(world, args.slot)

    for entry in world.res(DevLog).for_cat("notice", 10):
        print(f"  {entry['msg']}")
    print(f"[FARM] Done: {_summary(world)}")


if __name__ == "__main__":
    main()
