"""Booking pricing engine: session expansion, proration, fees, credits, discounts."""
