#!/usr/bin/env python3
"""
Basic FSSP simulation example.

This script demonstrates:
1. Writing a rule specification in both rule notations
2. Loading it into a state catalog and rule table
3. Stepping the line until it fires
4. Saving a space-time diagram
"""

from fssp import Simulation, load
from fssp.visualization import save_space_time_diagram


STATES = """\
state_number 4
W@black,gray,external
Q@black,white,soldier
G@white,red,general
F@white,blue,firing
"""

NAMES = ["W", "Q", "G", "F"]


def wave_rules() -> list[str]:
    """A cell fires once it or its left neighbour is active."""
    rules = []
    for l in NAMES:
        for c in NAMES:
            for r in NAMES:
                nxt = "F" if c in ("G", "F") or l in ("G", "F") else "Q"
                # Both notations are accepted
                sep = "->" if len(rules) % 2 else "##"
                rules.append(f"{l}##{c}##{r}{sep}{nxt}")
    return rules


def main():
    print("=" * 60)
    print("FSSP - Firing Squad Synchronization")
    print("Basic Simulation Example")
    print("=" * 60)
    print()

    rules = wave_rules()
    text = STATES + f"rule_number {len(rules)}\n" + "\n".join(rules) + "\n"

    catalog, table = load(text)
    print(f"Loaded {len(catalog)} states and {len(table)} rules")
    print()

    sim = Simulation(catalog, table, 12)

    history = []
    for names in sim.history(max_steps=100):
        history.append(names)
        print(f"{sim.step_count:3d} |" + "|".join(f"{n:>2}" for n in names) + "|")

    print()
    print(f"Fired after {sim.step_count} generations: {sim.is_settled()}")

    save_space_time_diagram(history, catalog, "wave.png", title="wave, 12 cells")
    print("Diagram saved to wave.png")


if __name__ == "__main__":
    main()
