"""Numeric constants shared by the stop criteria."""

# Ratio reported when the residual grows from an exactly-zero minimum
INFINITE_GROWTH = float("inf")

# Ratio reported when both the latest and the minimum residual are zero
NO_GROWTH = 1.0
