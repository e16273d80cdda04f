# Expression tree, tuple based. Every node supplies evaluate (), derive () and simplify () and a display form.
#
# ('#', value)            - Number, real scalar stored as the int or float it was created with
# ('@', 'name')           - Variable
# ('@=', expr)            - BoundVariable, anonymous variable standing for a fixed expression
# ('-vec', (e1, e2, ...)) - Vector literal
# ('-ivl', min, max)      - interval literal
# ('+', a, b)             - Plus
# ('-', a, b)             - Minus
# ('*', a, b)             - Times
# ('/', a, b)             - Divide
# ('^', a, b)             - Power
# ('%', a, b)             - Modulo
# ('u-', a)               - UnaryMinus
#
# Function nodes are in mfunc.py.

import logging

from merr import UnsupportedDomainError, UnsupportedOperationError
from mvals import EvaluationType, Vec, Interval, real_div, real_pow, real_mod

log = logging.getLogger (__name__)

REAL, VECTOR, INTERVAL = EvaluationType.REAL, EvaluationType.VECTOR, EvaluationType.INTERVAL

_FIXPOINT_LIMIT = 32 # maximum number of simplify () passes done by simplify_fixpoint ()

def to_expr (obj):
	if isinstance (obj, Expr):
		return obj

	if isinstance (obj, (int, float)) and not isinstance (obj, bool):
		return Number (obj)

	raise TypeError (f'can not use {obj!r} as an expression')

def _is_number (expr, value):
	return expr.is_num and expr.value == value

def _is_scalar (val):
	return isinstance (val, (int, float))

def _unsupported (node, type):
	if not isinstance (type, EvaluationType):
		return TypeError (f'invalid evaluation type {type!r}')

	return UnsupportedDomainError (node.label, type)

#...............................................................................................
class Expr (tuple):
	op      = None

	_OP2CLS = {} # filled in by register () for every concrete node class

	def __new__ (cls, *args):
		if cls.op is None:
			raise TypeError (f'can not instantiate abstract node {cls.__name__}')

		self = tuple.__new__ (cls, (cls.op,) + args)

		self._init (*args)

		return self

	def _init (self, *args):
		pass

	def __getattr__ (self, name): # calculate value for nonexistent self.name by calling self._name () and store
		func                 = getattr (self, f'_{name}') if name [0] != '_' else None
		val                  = func and func ()
		self.__dict__ [name] = val

		return val

	def _children (self): # direct sub-expressions, looking one level into tuples of them
		children = []

		for a in self [1:]:
			if isinstance (a, Expr):
				children.append (a)
			elif isinstance (a, tuple):
				children.extend (b for b in a if isinstance (b, Expr))

		return tuple (children)

	def _free_vars (self): # names of all variables in tree which need a binding to evaluate
		return frozenset ().union (*(c.free_vars for c in self.children))

	_is_const = lambda self: all (c.is_const for c in self.children)
	_has_call = lambda self: any (c.has_call for c in self.children) # FunctionCall somewhere in tree, its body is unknown until evaluation
	_label    = lambda self: type (self).__name__

	def evaluate (self, type, context):
		'''Evaluate the tree under the domain type (an EvaluationType) with
		variables and functions resolved through context (a ContextModel).'''

		raise NotImplementedError

	def derive (self, var):
		'''Return the unsimplified derivative of this tree with respect to the
		variable named var.'''

		raise NotImplementedError

	def simplify (self):
		'''Return the tree rewritten by one pass of local simplification rules.'''

		raise NotImplementedError

	def __str__ (self):
		raise NotImplementedError

	def __add__ (self, other):
		return Plus (self, other)

	def __radd__ (self, other):
		return Plus (other, self)

	def __sub__ (self, other):
		return Minus (self, other)

	def __rsub__ (self, other):
		return Minus (other, self)

	def __mul__ (self, other):
		return Times (self, other)

	def __rmul__ (self, other):
		return Times (other, self)

	def __truediv__ (self, other):
		return Divide (self, other)

	def __rtruediv__ (self, other):
		return Divide (other, self)

	def __pow__ (self, other):
		return Power (self, other)

	def __rpow__ (self, other):
		return Power (other, self)

	def __mod__ (self, other):
		return Modulo (self, other)

	def __rmod__ (self, other):
		return Modulo (other, self)

	def __neg__ (self):
		return UnaryMinus (self)

	@staticmethod
	def register (cls): # the set of node kinds is closed, each one must handle every transform
		for meth in ('evaluate', 'derive', 'simplify', '__str__'):
			if getattr (cls, meth) is getattr (Expr, meth):
				raise TypeError (f'node class {cls.__name__} does not supply {meth} ()')

		if cls.op in Expr._OP2CLS:
			raise TypeError (f'node tag {cls.op!r} of {cls.__name__} already registered to {Expr._OP2CLS [cls.op].__name__}')

		Expr._OP2CLS [cls.op] = cls

#...............................................................................................
class Number (Expr):
	'''Real constant. Under VECTOR evaluation the result is the plain float
	scalar and not a one element Vec, so it can scale vectors and combine
	with other scalars.'''

	op, is_num = '#', True

	def __new__ (cls, value):
		if not isinstance (value, (int, float)) or isinstance (value, bool):
			raise TypeError (f'number value must be int or float, not {value!r}')

		return Expr.__new__ (cls, value)

	def _init (self, value):
		self.value = value

	_is_const = lambda self: True

	def evaluate (self, type, context):
		if type is REAL or type is VECTOR: # a scalar is a valid vector arithmetic operand
			return float (self.value)

		if type is INTERVAL:
			return Interval (self.value)

		raise _unsupported (self, type)

	def derive (self, var):
		return Number (0)

	def simplify (self):
		return self

	def __str__ (self):
		return f'({self.value!r})' if self.value < 0 else repr (self.value)

class Variable (Expr):
	op, is_var = '@', True

	def __new__ (cls, name):
		if not isinstance (name, str) or not name:
			raise TypeError (f'variable name must be a non-empty string, not {name!r}')

		return Expr.__new__ (cls, name)

	def _init (self, name):
		self.name = name

	_free_vars = lambda self: frozenset ((self.name,))
	_is_const  = lambda self: False

	def evaluate (self, type, context):
		return context.get_expression (self.name).evaluate (type, context)

	def derive (self, var):
		return Number (1 if var == self.name else 0)

	def simplify (self):
		return self

	def __str__ (self):
		return self.name

class BoundVariable (Variable):
	'''Anonymous variable bound to a fixed expression, lets default functions
	take arbitrary expressions where a parameter Variable is expected.'''

	op, is_var_bound = '@=', True

	def __new__ (cls, value):
		return Expr.__new__ (cls, to_expr (value))

	def _init (self, value):
		self.name, self.value = '', value

	_free_vars = lambda self: self.value.free_vars
	_is_const  = lambda self: self.value.is_const

	def evaluate (self, type, context):
		return self.value.evaluate (type, context)

	def derive (self, var):
		return self.value.derive (var)

	def simplify (self):
		return self.value.simplify ()

	def __str__ (self):
		return str (self.value)

class Vector (Expr):
	op, is_vec = '-vec', True

	def __new__ (cls, elements):
		elements = tuple (to_expr (e) for e in elements)

		if not elements:
			raise ValueError ('vector literal needs at least one element')

		return Expr.__new__ (cls, elements)

	def _init (self, elements):
		self.elements = elements

	dim = property (lambda self: len (self.elements))

	def evaluate (self, type, context):
		if type is VECTOR:
			return Vec (e.evaluate (REAL, context) for e in self.elements)

		if type is REAL and self.dim == 1:
			return self.elements [0].evaluate (REAL, context)

		raise _unsupported (self, type)

	def derive (self, var):
		return Vector (e.derive (var) for e in self.elements)

	def simplify (self):
		return Vector (e.simplify () for e in self.elements)

	def __str__ (self):
		return f'[{", ".join (str (e) for e in self.elements)}]'

class IntervalLiteral (Expr):
	op, is_ivl = '-ivl', True

	def __new__ (cls, min, max):
		return Expr.__new__ (cls, to_expr (min), to_expr (max))

	def _init (self, min, max):
		self.min, self.max = min, max

	def evaluate (self, type, context):
		if type is INTERVAL:
			return Interval (self.min.evaluate (REAL, context), self.max.evaluate (REAL, context))

		raise _unsupported (self, type)

	def derive (self, var):
		raise UnsupportedOperationError (f'can not differentiate interval literal {self}')

	def simplify (self):
		return IntervalLiteral (self.min.simplify (), self.max.simplify ())

	def __str__ (self):
		return f'[{self.min} .. {self.max}]'

#...............................................................................................
class BinaryOperator (Expr):
	is_binop = True

	def __new__ (cls, first, second):
		return Expr.__new__ (cls, to_expr (first), to_expr (second))

	def _init (self, first, second):
		self.first, self.second = first, second

	def evaluate (self, type, context):
		a, b = self.first.evaluate (type, context), self.second.evaluate (type, context)

		if type is REAL:
			return self._real (a, b)
		elif type is VECTOR:
			return self._vector (a, b)
		elif type is INTERVAL:
			return self._interval (a, b)

		raise _unsupported (self, type)

	def _vector (self, a, b): # plain scalar arithmetic is fine in vector domain, anything else per operator
		if _is_scalar (a) and _is_scalar (b):
			return self._real (a, b)

		raise UnsupportedDomainError (f'{self.label} of {type (a).__name__} and {type (b).__name__}', VECTOR)

	def _interval (self, a, b):
		raise UnsupportedDomainError (self.label, INTERVAL)

	def __str__ (self):
		return f'({self.first} {self.op} {self.second})'

class Plus (BinaryOperator):
	op, is_plus = '+', True

	_real     = staticmethod (lambda a, b: a + b)
	_interval = _real

	def _vector (self, a, b):
		if isinstance (a, Vec) and isinstance (b, Vec):
			return a + b

		return BinaryOperator._vector (self, a, b)

	def derive (self, var):
		return Plus (self.first.derive (var), self.second.derive (var))

	def simplify (self):
		a, b = self.first.simplify (), self.second.simplify ()

		if _is_number (a, 0):
			return b # 0 + b = b

		if _is_number (b, 0):
			return a # a + 0 = a

		if b.is_neg:
			return Minus (a, b.exp) # a + -(b) = a - b

		if b.is_num and b.value < 0:
			return Minus (a, Number (-b.value)) # a + (-n) = a - n

		return Plus (a, b)

class Minus (BinaryOperator):
	op, is_minus = '-', True

	_real     = staticmethod (lambda a, b: a - b)
	_interval = _real

	def _vector (self, a, b):
		if isinstance (a, Vec) and isinstance (b, Vec):
			return a - b

		return BinaryOperator._vector (self, a, b)

	def derive (self, var):
		return Minus (self.first.derive (var), self.second.derive (var))

	def simplify (self):
		a, b = self.first.simplify (), self.second.simplify ()

		if _is_number (b, 0):
			return a # a - 0 = a

		if _is_number (a, 0):
			return UnaryMinus (b) # 0 - b = -(b)

		if b.is_neg:
			return Plus (a, b.exp) # a - -(b) = a + b

		if b.is_num and b.value < 0:
			return Plus (a, Number (-b.value)) # a - (-n) = a + n

		return Minus (a, b)

class Times (BinaryOperator):
	op, is_times = '*', True

	_real     = staticmethod (lambda a, b: a * b)
	_interval = _real

	def _vector (self, a, b): # scalar multiplication
		if (isinstance (a, Vec) and _is_scalar (b)) or (_is_scalar (a) and isinstance (b, Vec)):
			return a * b

		return BinaryOperator._vector (self, a, b)

	def derive (self, var):
		return Plus (Times (self.first, self.second.derive (var)), Times (self.first.derive (var), self.second))

	def simplify (self):
		a, b = self.first.simplify (), self.second.simplify ()

		if _is_number (a, 0) or _is_number (b, 0):
			return Number (0) # 0 * b = a * 0 = 0

		if _is_number (a, 1):
			return b # 1 * b = b

		if _is_number (b, 1):
			return a # a * 1 = a

		if a.is_neg and b.is_neg:
			return Times (a.exp, b.exp) # -(a) * -(b) = a * b

		if a.is_neg:
			return UnaryMinus (Times (a.exp, b)) # -(a) * b = -(a * b)

		if b.is_neg:
			return UnaryMinus (Times (a, b.exp)) # a * -(b) = -(a * b)

		return Times (a, b)

class Divide (BinaryOperator):
	op, is_div = '/', True

	_real = staticmethod (real_div)

	def _vector (self, a, b):
		if isinstance (a, Vec) and _is_scalar (b):
			return a / b

		return BinaryOperator._vector (self, a, b)

	def _interval (self, a, b):
		return a / b

	def derive (self, var): # quotient rule
		return Divide (
				Minus (Times (self.first.derive (var), self.second), Times (self.first, self.second.derive (var))),
				Times (self.second, self.second))

	def simplify (self):
		a, b = self.first.simplify (), self.second.simplify ()

		if _is_number (a, 0):
			return Number (0) # 0 / b = 0

		if _is_number (b, 1):
			return a # a / 1 = a

		if a.is_neg and b.is_neg:
			return Divide (a.exp, b.exp) # -(a) / -(b) = a / b

		if a.is_neg:
			return UnaryMinus (Divide (a.exp, b)) # -(a) / b = -(a / b)

		if b.is_neg:
			return UnaryMinus (Divide (a, b.exp)) # a / -(b) = -(a / b)

		return Divide (a, b)

class Power (BinaryOperator):
	op, is_pow = '^', True

	_real = staticmethod (real_pow)

	base = property (lambda self: self.first)
	exp  = property (lambda self: self.second)

	def evaluate (self, type, context):
		if type is INTERVAL: # exponent stays a real number
			return self.first.evaluate (INTERVAL, context) ** self.second.evaluate (REAL, context)

		return BinaryOperator.evaluate (self, type, context)

	def derive (self, var):
		base, exp = self.first, self.second

		if var not in exp.free_vars and not exp.has_call: # (f^n)' = n * f^(n - 1) * f'
			if exp.is_num:
				return Times (Times (exp, Power (base, Number (exp.value - 1))), base.derive (var))

			return Times (Times (exp, Power (base, Minus (exp, Number (1)))), base.derive (var))

		if var not in base.free_vars and not base.has_call: # (a^g)' = a^g * ln (a) * g'
			return Times (Times (self, mfunc.Ln (base)), exp.derive (var))

		return self.as_exponential ().derive (var)

	def simplify (self):
		a, b = self.first.simplify (), self.second.simplify ()

		if _is_number (b, 0):
			return Number (1) # a^0 = 1

		if _is_number (b, 1):
			return a # a^1 = a

		if _is_number (a, 1):
			return Number (1) # 1^b = 1

		return Power (a, b)

	def as_exponential (self):
		'''Rewrite f^g as exp (g * ln (f)), used to differentiate when base and
		exponent both depend on the variable or hide a function call.'''

		return mfunc.Exponential (Times (self.second, mfunc.Ln (self.first)))

	def __str__ (self): # unary minus binds looser than '^', negated base keeps its own parentheses
		base = f'({self.first})' if self.first.is_neg else str (self.first)

		return f'({base} ^ {self.second})'

class Modulo (BinaryOperator):
	op, is_mod = '%', True

	_real = staticmethod (real_mod)

	def derive (self, var): # (a mod b)' = a' - floor (a / b) * b', ignoring the jumps
		return Minus (self.first.derive (var), Times (mfunc.Floor (Divide (self.first, self.second)), self.second.derive (var)))

	def simplify (self):
		return Modulo (self.first.simplify (), self.second.simplify ())

class UnaryMinus (Expr):
	op, is_neg = 'u-', True

	def __new__ (cls, exp):
		return Expr.__new__ (cls, to_expr (exp))

	def _init (self, exp):
		self.exp = exp

	def evaluate (self, type, context):
		if not isinstance (type, EvaluationType):
			raise _unsupported (self, type)

		return -self.exp.evaluate (type, context)

	def derive (self, var):
		return UnaryMinus (self.exp.derive (var))

	def simplify (self):
		exp = self.exp.simplify ()

		if exp.is_neg:
			return exp.exp # -(-(a)) = a

		if _is_number (exp, 0):
			return exp # -(0) = 0

		return UnaryMinus (exp)

	def __str__ (self):
		return f'-{self.exp}' if self.exp.is_binop else f'-({self.exp})'

#...............................................................................................
def simplify_fixpoint (expr, limit = None):
	'''Apply simplify () repeatedly until the tree stops changing or limit
	passes (default from set_fixpoint_limit ()) have been done.'''

	limit = _FIXPOINT_LIMIT if limit is None else limit

	for i in range (limit):
		simp = expr.simplify ()

		if simp == expr:
			log.debug ('simplification stable after %d pass(es): %s', i + 1, simp)

			return simp

		expr = simp

	log.debug ('simplification pass limit %d reached: %s', limit, expr)

	return expr

def set_fixpoint_limit (limit):
	global _FIXPOINT_LIMIT

	if not isinstance (limit, int) or limit < 1:
		raise ValueError (f'fixpoint pass limit must be a positive integer, not {limit!r}')

	_FIXPOINT_LIMIT = limit

#...............................................................................................
_NODE_CLASSES = [Number, Variable, BoundVariable, Vector, IntervalLiteral, Plus, Minus, Times, Divide, Power, Modulo, UnaryMinus]

for _cls in _NODE_CLASSES:
	Expr.register (_cls)

import mfunc # function nodes use the classes above, imported last
