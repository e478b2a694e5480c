"""
Evaluate ASK_AI inside a local formualizer workbook.

Uses the transport selected by the environment (the offline mock transport
unless ASK_AI_TRANSPORT=http and ASK_AI_ENDPOINT are set), so it runs
without credentials or network access by default.
"""

import logging

import formualizer as fz

from askai.hosts import register_ask_ai, write_grid

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
)


def main():
    wb = fz.Workbook()
    wb.add_sheet("Sales")
    write_grid(wb, "Sales", [
        ["Product", "Q1", "Q2"],
        ["Widget", 120, 135],
        ["Gadget", 80, 64],
    ])

    register_ask_ai(wb, unit_id="sales-demo")
    wb.set_formula("Sales", 1, 5, '=ASK_AI(A1:C3, "Which product is growing?")')

    print("ASK_AI answer spilled from E1:")
    for r in range(1, 3):
        print([wb.evaluate_cell("Sales", r, c) for c in range(5, 7)])


if __name__ == "__main__":
    main()
