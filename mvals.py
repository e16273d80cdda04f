# Numeric value types produced by evaluation: real scalars (floats), vectors and intervals.

from enum import Enum
import math

class EvaluationType (Enum):
	REAL     = 'real'     # double precision scalar
	VECTOR   = 'vector'   # fixed small dimension numeric vector
	INTERVAL = 'interval' # closed interval [min, max]

#...............................................................................................
# IEEE style real arithmetic, domain errors give nan and overflows give signed infinity instead of raising.

def real_div (a, b):
	if b:
		return a / b

	if a and not math.isnan (a):
		return math.copysign (math.inf, a) * math.copysign (1., b)

	return math.nan

def real_pow (a, b):
	if a < 0 and math.isfinite (b) and not float (b).is_integer (): # would be complex
		return math.nan

	try:
		return float (a) ** b

	except ZeroDivisionError: # 0 ** -n
		return math.inf

	except OverflowError:
		return -math.inf if a < 0 and b % 2 == 1 else math.inf

def real_mod (a, b):
	if not b or not math.isfinite (a):
		return math.nan

	return a % b

def real_func (func, x): # math module unary function with domain errors mapped to nan, overflows to inf
	try:
		return float (func (x))

	except ValueError:
		return -math.inf if func is math.log and x == 0 else math.nan

	except OverflowError:
		return math.inf

#...............................................................................................
class Vec (tuple):
	'''Fixed dimension numeric vector, components are floats.'''

	def __new__ (cls, *comps):
		if len (comps) == 1 and not isinstance (comps [0], (int, float)):
			comps = tuple (comps [0])

		if not comps:
			raise ValueError ('vector must have at least one component')

		return tuple.__new__ (cls, (float (c) for c in comps))

	dim = property (lambda self: len (self))
	x   = property (lambda self: self [0])
	y   = property (lambda self: self [1])
	z   = property (lambda self: self [2])
	w   = property (lambda self: self [3])

	def _check (self, other):
		if not isinstance (other, Vec):
			return False

		if len (other) != len (self):
			raise ValueError (f'vector dimension mismatch {len (self)} != {len (other)}')

		return True

	def __add__ (self, other):
		return Vec (a + b for a, b in zip (self, other)) if self._check (other) else NotImplemented

	def __sub__ (self, other):
		return Vec (a - b for a, b in zip (self, other)) if self._check (other) else NotImplemented

	def __mul__ (self, other):
		if isinstance (other, (int, float)):
			return Vec (a * other for a in self)

		return NotImplemented

	__rmul__ = __mul__

	def __truediv__ (self, other):
		if isinstance (other, (int, float)):
			return Vec (real_div (a, other) for a in self)

		return NotImplemented

	def __neg__ (self):
		return Vec (-a for a in self)

	def dot (self, other):
		self._check (other)

		return sum (a * b for a, b in zip (self, other))

	def length (self):
		return math.sqrt (self.dot (self))

	def __repr__ (self):
		return f'Vec({", ".join (repr (c) for c in self)})'

	def __str__ (self):
		return f'[{", ".join (str (c) for c in self)}]'

#...............................................................................................
class Interval (tuple):
	'''Closed interval [min, max] with interval arithmetic.

	Plain numbers mixed into interval arithmetic are treated as degenerate
	intervals. Division by an interval containing zero raises ZeroDivisionError.
	'''

	def __new__ (cls, min, max = None):
		max  = min if max is None else max
		self = tuple.__new__ (cls, (float (min), float (max)))

		if self [0] > self [1]:
			raise ValueError (f'invalid interval [{min}, {max}], min > max')

		return self

	min = property (lambda self: self [0])
	max = property (lambda self: self [1])

	@staticmethod
	def _wrap (other):
		if isinstance (other, Interval):
			return other

		if isinstance (other, (int, float)):
			return Interval (other, other)

		return None

	def contains (self, x):
		return self [0] <= x <= self [1]

	def contains_zero (self):
		return self.contains (0)

	def length (self):
		return self [1] - self [0]

	def __add__ (self, other):
		other = self._wrap (other)

		return NotImplemented if other is None else Interval (self [0] + other [0], self [1] + other [1])

	__radd__ = __add__

	def __sub__ (self, other):
		other = self._wrap (other)

		return NotImplemented if other is None else Interval (self [0] - other [1], self [1] - other [0])

	def __rsub__ (self, other):
		other = self._wrap (other)

		return NotImplemented if other is None else other - self

	def __mul__ (self, other):
		other = self._wrap (other)

		if other is None:
			return NotImplemented

		prods = [a * b for a in self for b in other]

		return Interval (min (prods), max (prods))

	__rmul__ = __mul__

	def __truediv__ (self, other):
		other = self._wrap (other)

		if other is None:
			return NotImplemented

		if other.contains_zero ():
			raise ZeroDivisionError (f'division by interval {other} containing zero')

		return self * Interval (1 / other [1], 1 / other [0])

	def __rtruediv__ (self, other):
		other = self._wrap (other)

		return NotImplemented if other is None else other / self

	def __neg__ (self):
		return Interval (-self [1], -self [0])

	def __pow__ (self, exp): # exp is a real number
		lo, hi = self

		if float (exp).is_integer ():
			exp = int (exp)

			if exp < 0:
				return Interval (1.) / (self ** -exp)

			if exp % 2 or lo >= 0: # odd exponent or non-negative interval, monotonic
				return Interval (lo ** exp, hi ** exp)

			if hi <= 0:
				return Interval (hi ** exp, lo ** exp)

			return Interval (0, max (lo ** exp, hi ** exp))

		if lo < 0:
			raise ValueError (f'non-integer power {exp} of interval {self} reaching below zero')

		if exp >= 0:
			return Interval (lo ** exp, hi ** exp)

		if lo == 0:
			raise ZeroDivisionError (f'negative power {exp} of interval {self} containing zero')

		return Interval (hi ** exp, lo ** exp)

	def map (self, func): # apply monotonically increasing function to endpoints
		return Interval (func (self [0]), func (self [1]))

	def __repr__ (self):
		return f'Interval({self [0]!r}, {self [1]!r})'

	def __str__ (self):
		return f'[{self [0]}, {self [1]}]'
