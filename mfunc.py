# Function nodes: built in default functions, user defined functions, composition and call by name.
#
# ('exp', (arg,))         - Exponential
# ('log', (base, arg))    - Log
# ('ln', (arg,))          - Ln
# ('nrt', n, (arg,))      - Root, n is a positive python int
# ('sqrt', (arg,))        - Sqrt
# ('sin', (arg,)), ...    - other single argument default functions
# ('-func', 'name', (var1, var2, ...), expr) - CustomFunction
# ('-comp', f, g)         - CompositeFunction, g (f (x))
# ('-call', 'name')       - FunctionCall

import logging
import math

from merr import UnsupportedOperationError, UnsupportedDimensionError
from mvals import Vec, real_func
from mast import (Expr, Number, Variable, BoundVariable, Plus, Minus, Times, Divide, Power, UnaryMinus,
		to_expr, _is_number, _unsupported, REAL, VECTOR, INTERVAL)

log = logging.getLogger (__name__)

def _bind (arg): # parameters of default functions are always Variables, anything else gets anonymously bound
	return arg if isinstance (arg, Variable) else BoundVariable (arg)

def _unbound (var):
	return var.value if var.is_var_bound else var

def _argstr (arg):
	s = str (arg)

	return s [1:-1] if arg.is_var_bound and arg.value.is_binop else s

def _as_function (expr, orig): # rewrap result of simplify () as a function when it lost that shape
	return expr if expr.is_func else CustomFunction (orig.name, orig.args, expr)

#...............................................................................................
class MathFunction (Expr):
	is_func = True
	args    = ()

	_label  = lambda self: self.name

	domain_dimension = property (lambda self: len (self.args))

	def get_param (self, i):
		return self.args [i]

	def get_param_by_name (self, name):
		for var in self.args:
			if var.name == name:
				return var

		raise ValueError (f'function {self.name!r} has no parameter {name!r}')

	def __and__ (self, other): # f & g = g (f (x))
		return CompositeFunction (self, other)

	def __str__ (self):
		return f'{self.name}({", ".join (_argstr (a) for a in self.args)})'

	def to_full_string (self):
		return str (self)

#...............................................................................................
class DefaultFunction (MathFunction):
	is_default  = True
	nargs       = 1

	_real_func     = None # math module function, None if not evaluable on reals directly
	_interval_func = None # function of Interval, None if not evaluable on intervals directly

	def __new__ (cls, *args):
		if len (args) != cls.nargs:
			raise TypeError (f'{cls.name} () takes {cls.nargs} argument(s), {len (args)} given')

		return Expr.__new__ (cls, tuple (_bind (a) for a in args))

	def _init (self, args):
		self.args = args

	arg      = property (lambda self: self.args [-1])
	arg_expr = property (lambda self: _unbound (self.args [-1]))

	def evaluate (self, type, context):
		if type is REAL and self._real_func is not None:
			return real_func (self._real_func, self.arg.evaluate (REAL, context))

		if type is INTERVAL and self._interval_func is not None:
			return self._interval_func (self.arg.evaluate (INTERVAL, context))

		raise _unsupported (self, type) # before evaluating argument

	def simplify (self):
		return type (self) (*(a.simplify () for a in self.args))

class Exponential (DefaultFunction):
	op, name, is_exp = 'exp', 'exp', True

	_real_func     = math.exp
	_interval_func = staticmethod (lambda i: i.map (lambda x: real_func (math.exp, x)))

	def derive (self, var):
		return Times (self, self.arg.derive (var))

	def simplify (self):
		arg = self.arg.simplify ()

		if _is_number (arg, 0):
			return Number (1)

		if _is_number (arg, 1):
			return Number (math.e)

		if arg.is_times and arg.second.is_ln: # exp (x * ln (y)) = y ^ x
			return Power (arg.second.arg_expr, arg.first)

		return Exponential (arg)

class Log (DefaultFunction):
	'''Logarithm of arg to base, both expressions. Evaluated and differentiated
	as ln (arg) / ln (base).'''

	op, name, is_log = 'log', 'log', True
	nargs            = 2

	base      = property (lambda self: self.args [0])
	base_expr = property (lambda self: _unbound (self.args [0]))

	def as_natural_logarithm (self):
		return Divide (Ln (self.arg_expr), Ln (self.base_expr))

	def evaluate (self, type, context):
		if type is REAL or type is INTERVAL:
			return self.as_natural_logarithm ().evaluate (type, context)

		raise _unsupported (self, type)

	def derive (self, var):
		return self.as_natural_logarithm ().derive (var)

class Ln (Log):
	op, name, is_ln = 'ln', 'ln', True
	nargs           = 1

	_real_func     = math.log
	_interval_func = staticmethod (lambda i: i.map (lambda x: real_func (math.log, x)))

	base      = property (lambda self: BoundVariable (Number (math.e)))
	base_expr = property (lambda self: Number (math.e))
	evaluate  = DefaultFunction.evaluate

	def derive (self, var):
		return Divide (self.arg.derive (var), self.arg_expr)

	def simplify (self):
		arg = self.arg.simplify ()

		return Number (0) if _is_number (arg, 1) else Ln (arg)

class Root (DefaultFunction):
	op, name, is_root = 'nrt', 'nrt', True

	def __new__ (cls, n, arg):
		if not isinstance (n, int) or isinstance (n, bool) or n < 1:
			raise TypeError (f'root index must be a positive integer, not {n!r}')

		return Expr.__new__ (cls, n, (_bind (arg),))

	def _init (self, n, args):
		self.n, self.args = n, args

	def as_power (self):
		return Power (self.arg_expr, Divide (Number (1), Number (self.n)))

	def evaluate (self, type, context):
		if type is REAL or type is INTERVAL:
			return self.as_power ().evaluate (type, context)

		raise _unsupported (self, type)

	def derive (self, var):
		return self.as_power ().derive (var)

	def simplify (self):
		return Root (self.n, self.arg.simplify ())

	def __str__ (self):
		return f'nrt({self.n}, {_argstr (self.arg)})'

class Sqrt (Root):
	op, name, is_sqrt = 'sqrt', 'sqrt', True
	n                 = 2

	_real_func     = math.sqrt
	_interval_func = staticmethod (lambda i: i.map (lambda x: real_func (math.sqrt, x)))

	def __new__ (cls, arg):
		return Expr.__new__ (cls, (_bind (arg),))

	def _init (self, args):
		self.args = args

	evaluate = DefaultFunction.evaluate

	def simplify (self):
		arg = self.arg.simplify ()

		if arg.is_pow and _is_number (arg.second, 2):
			return arg.first

		if _is_number (arg, 0) or _is_number (arg, 1):
			return arg

		return Sqrt (arg)

	__str__ = MathFunction.__str__

#...............................................................................................
class Sin (DefaultFunction):
	op, name, is_sin = 'sin', 'sin', True

	_real_func = math.sin

	def derive (self, var):
		return Times (Cos (self.arg_expr), self.arg.derive (var))

	def simplify (self):
		arg = self.arg.simplify ()

		return arg if _is_number (arg, 0) else Sin (arg)

class Cos (DefaultFunction):
	op, name, is_cos = 'cos', 'cos', True

	_real_func = math.cos

	def derive (self, var):
		return Times (UnaryMinus (Sin (self.arg_expr)), self.arg.derive (var))

	def simplify (self):
		arg = self.arg.simplify ()

		return Number (1) if _is_number (arg, 0) else Cos (arg)

class Tan (DefaultFunction):
	op, name, is_tan = 'tan', 'tan', True

	_real_func = math.tan

	def as_sin_cos (self):
		return Divide (Sin (self.arg_expr), Cos (self.arg_expr))

	def derive (self, var):
		return self.as_sin_cos ().derive (var)

	def simplify (self):
		arg = self.arg.simplify ()

		return arg if _is_number (arg, 0) else Tan (arg)

class Asin (DefaultFunction):
	op, name, is_asin = 'arcsin', 'arcsin', True

	_real_func = math.asin

	def derive (self, var): # 1 / sqrt (1 - x^2)
		return Times (Divide (Number (1), Sqrt (Minus (Number (1), Power (self.arg_expr, Number (2))))), self.arg.derive (var))

class Acos (DefaultFunction):
	op, name, is_acos = 'arccos', 'arccos', True

	_real_func = math.acos

	def derive (self, var): # -1 / sqrt (1 - x^2)
		return Times (Divide (UnaryMinus (Number (1)), Sqrt (Minus (Number (1), Power (self.arg_expr, Number (2))))), self.arg.derive (var))

class Atan (DefaultFunction):
	op, name, is_atan = 'arctan', 'arctan', True

	_real_func = math.atan

	def derive (self, var): # 1 / (1 + x^2)
		return Times (Divide (Number (1), Plus (Number (1), Power (self.arg_expr, Number (2)))), self.arg.derive (var))

#...............................................................................................
def _ceil (x):
	return float (math.ceil (x)) if math.isfinite (x) else x

def _floor (x):
	return float (math.floor (x)) if math.isfinite (x) else x

def _sgn (x):
	return x if math.isnan (x) else float ((x > 0) - (x < 0))

class Abs (DefaultFunction):
	op, name, is_abs = 'abs', 'abs', True

	_real_func = math.fabs

	def derive (self, var): # not defined at 0
		return Times (Sgn (self.arg_expr), self.arg.derive (var))

class Ceil (DefaultFunction):
	op, name, is_ceil = 'ceil', 'ceil', True

	_real_func = staticmethod (_ceil)

	def derive (self, var):
		return Number (0)

	def simplify (self):
		arg = self.arg.simplify ()

		return arg if arg.is_ceil or arg.is_floor else Ceil (arg)

class Floor (DefaultFunction):
	op, name, is_floor = 'floor', 'floor', True

	_real_func = staticmethod (_floor)

	def derive (self, var):
		return Number (0)

	def simplify (self):
		arg = self.arg.simplify ()

		return arg if arg.is_ceil or arg.is_floor else Floor (arg)

class Sgn (DefaultFunction):
	op, name, is_sgn = 'sgn', 'sgn', True

	_real_func = staticmethod (_sgn)

	def derive (self, var):
		return Number (0)

#...............................................................................................
class CustomFunction (MathFunction):
	op, is_custom = '-func', True

	def __new__ (cls, name, args, expression):
		args = tuple (Variable (a) if isinstance (a, str) else a for a in args)

		if not isinstance (name, str) or not name:
			raise TypeError (f'function name must be a non-empty string, not {name!r}')

		if not all (isinstance (a, Variable) for a in args):
			raise TypeError (f'function parameters must be variables, not {args!r}')

		return Expr.__new__ (cls, name, args, to_expr (expression))

	def _init (self, name, args, expression):
		self.name, self.args, self.expression = name, args, expression

	def evaluate (self, type, context):
		return self.expression.evaluate (type, context)

	def derive (self, var):
		return CustomFunction (self.name, self.args, self.expression.derive (var))

	def simplify (self):
		return CustomFunction (self.name, self.args, self.expression.simplify ())

	def to_full_string (self):
		return f'{self} = {self.expression}'

class CompositeFunction (MathFunction):
	'''Composition g (f (x)). The parameters of g are bound to the components
	of the value of f, so g can take 1 to 4 parameters, f is evaluated as a
	real for 1 and as a vector of matching dimension otherwise.'''

	op, is_comp = '-comp', True

	def __new__ (cls, f, g):
		if not (getattr (f, 'is_func', False) and getattr (g, 'is_func', False)):
			raise TypeError (f'can only compose functions, not {f!r} and {g!r}')

		return Expr.__new__ (cls, f, g)

	def _init (self, f, g):
		self.f, self.g = f, g
		self.name      = f'comp({f.name},{g.name})'
		self.args      = f.args

	_free_vars = lambda self: self.f.free_vars

	def evaluate (self, type, context):
		dim = self.g.domain_dimension

		if not 1 <= dim <= 4:
			raise UnsupportedDimensionError (f'can not compose into function {self.g.name!r} of dimension {dim}')

		if dim == 1:
			vals = (self.f.evaluate (REAL, context),)

		else:
			vals = self.f.evaluate (VECTOR, context)

			if not isinstance (vals, Vec) or vals.dim != dim:
				raise UnsupportedDimensionError (f'function {self.f.name!r} does not produce a vector of dimension {dim}')

		log.debug ('composite %s feeding %s into %s', self.name, vals, self.g.name)

		ctx = context.create_child_scope ()

		for var, val in zip (self.g.args, vals):
			if not var.is_var_bound: # fixed argument like the 0 of cos(0) ignores its value
				ctx.bind_variable (var, Number (float (val)))

		return self.g.evaluate (type, ctx)

	def derive (self, var): # chain rule, g' (f (x)) * f' (x)
		dg = self.g.derive (var)

		if not dg.is_func:
			dg = CustomFunction (f'd{self.g.name}', self.g.args, dg)

		return Times (CompositeFunction (self.f, dg), self.f.derive (var))

	def simplify (self):
		return CompositeFunction (_as_function (self.f.simplify (), self.f), _as_function (self.g.simplify (), self.g))

class FunctionCall (MathFunction):
	'''Reference to a function by name, looked up in the context on evaluation.'''

	op, is_call = '-call', True

	def __new__ (cls, name):
		if not isinstance (name, str) or not name:
			raise TypeError (f'function name must be a non-empty string, not {name!r}')

		return Expr.__new__ (cls, name)

	def _init (self, name):
		self.name = name

	_free_vars = lambda self: frozenset ()
	_is_const  = lambda self: False
	_has_call  = lambda self: True

	def evaluate (self, type, context):
		return context.get_function (self.name).evaluate (type, context.create_child_scope ())

	def derive (self, var):
		raise UnsupportedOperationError (f'can not differentiate call to unresolved function {self.name}()')

	def simplify (self):
		return self

	def __str__ (self):
		return f'{self.name}()'

#...............................................................................................
_FUNCTION_CLASSES = [Exponential, Log, Ln, Root, Sqrt, Sin, Cos, Tan, Asin, Acos, Atan, Abs, Ceil, Floor, Sgn,
		CustomFunction, CompositeFunction, FunctionCall]

for _cls in _FUNCTION_CLASSES:
	Expr.register (_cls)
