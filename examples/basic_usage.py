#!/usr/bin/env python3
"""Example of basic pricing curve usage."""

from tier_pricing import UNLIMITED, PricingEngine, format_amount


def print_curve(engine):
    """Print the breakpoints of the engine's current curve.

    Args:
        engine: PricingEngine holding the configuration to show
    """
    currency = engine.config.currency
    for point in engine.curve.points():
        average = "-" if point.average is None else format_amount(point.average, currency)
        print(
            f"  {point.label:>8g} units  "
            f"total {format_amount(point.cumulative, currency):>12}  "
            f"avg {average:>8}  "
            f"marginal {format_amount(point.current, currency):>8}"
        )
    print()


def main():
    """Run the example."""
    engine = PricingEngine()

    print("Default schedule:")
    print_curve(engine)

    print("With a 5,000 revenue floor and 10% discount:")
    engine.update(mrr=5000, discount=10)
    print_curve(engine)

    print("First tier unlimited:")
    engine.config = engine.config.update_tier(0, multiplier=UNLIMITED)
    print_curve(engine)


if __name__ == "__main__":
    main()
