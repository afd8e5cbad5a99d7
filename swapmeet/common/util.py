from decimal import ROUND_HALF_UP, Decimal


def round_half_up(number: float, digits: int = 1) -> float:
	"""
	Round a number with halves going away from zero, unlike the built-in banker's rounding.

	Args:
		number: The number to round.
		digits: How many decimal places to keep.

	Returns:
		float: The rounded number.

	Example:
		>>> round_half_up(3.25)
		3.3
		>>> round(3.25, 1)
		3.2
	"""
	quantum = Decimal(1).scaleb(-digits)
	return float(Decimal(str(number)).quantize(quantum, rounding=ROUND_HALF_UP))
