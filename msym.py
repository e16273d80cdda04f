# Convert between expression trees and SymPy expressions.

import math
import sympy as sp

import mfunc
from merr import UnsupportedOperationError
from mast import Number, Variable, Plus, Minus, Times, Divide, Power, Modulo, UnaryMinus

_EVALUATE = True # let SymPy evaluate (canonicalize) expressions as they are built from trees

def _raise (exc):
	raise exc

#...............................................................................................
class expr2spt: # expression tree -> sympy tree (expression)
	_FUNCS = { # single argument default functions
		'exp'   : sp.exp,
		'ln'    : sp.log,
		'sin'   : sp.sin,
		'cos'   : sp.cos,
		'tan'   : sp.tan,
		'arcsin': sp.asin,
		'arccos': sp.acos,
		'arctan': sp.atan,
		'abs'   : sp.Abs,
		'ceil'  : sp.ceiling,
		'floor' : sp.floor,
		'sgn'   : sp.sign,
	}

	def __new__ (cls, expr):
		self = super ().__new__ (cls)

		return self._expr2spt (expr)

	def _expr2spt (self, expr):
		func = self._FUNCS.get (expr.op)

		if func is not None:
			return func (self._expr2spt (expr.arg), evaluate = _EVALUATE)

		return self._expr2spt_funcs [expr.op] (self, expr)

	def _expr2spt_comp (self, expr): # substitute components of f for parameters of g
		f, g = self._expr2spt (expr.f), self._expr2spt (expr.g)
		vals = list (f) if isinstance (f, sp.MatrixBase) else [f]

		return g.subs ({sp.Symbol (v.name): s for v, s in zip (expr.g.args, vals) if not v.is_var_bound}, simultaneous = True)

	_expr2spt_funcs = {
		'#'    : lambda self, expr: sp.Integer (expr.value) if isinstance (expr.value, int) else sp.Float (expr.value),
		'@'    : lambda self, expr: sp.Symbol (expr.name),
		'@='   : lambda self, expr: self._expr2spt (expr.value),
		'-vec' : lambda self, expr: sp.Matrix ([self._expr2spt (e) for e in expr.elements]),
		'-ivl' : lambda self, expr: sp.Interval (self._expr2spt (expr.min), self._expr2spt (expr.max)),
		'+'    : lambda self, expr: sp.Add (self._expr2spt (expr.first), self._expr2spt (expr.second), evaluate = _EVALUATE),
		'-'    : lambda self, expr: sp.Add (self._expr2spt (expr.first), sp.Mul (sp.S.NegativeOne, self._expr2spt (expr.second), evaluate = _EVALUATE), evaluate = _EVALUATE),
		'*'    : lambda self, expr: sp.Mul (self._expr2spt (expr.first), self._expr2spt (expr.second), evaluate = _EVALUATE),
		'/'    : lambda self, expr: sp.Mul (self._expr2spt (expr.first), sp.Pow (self._expr2spt (expr.second), sp.S.NegativeOne, evaluate = _EVALUATE), evaluate = _EVALUATE),
		'^'    : lambda self, expr: sp.Pow (self._expr2spt (expr.first), self._expr2spt (expr.second), evaluate = _EVALUATE),
		'%'    : lambda self, expr: sp.Mod (self._expr2spt (expr.first), self._expr2spt (expr.second), evaluate = _EVALUATE),
		'u-'   : lambda self, expr: sp.Mul (sp.S.NegativeOne, self._expr2spt (expr.exp), evaluate = _EVALUATE),
		'log'  : lambda self, expr: sp.log (self._expr2spt (expr.arg), self._expr2spt (expr.base)),
		'nrt'  : lambda self, expr: sp.Pow (self._expr2spt (expr.arg), sp.Rational (1, expr.n), evaluate = _EVALUATE),
		'sqrt' : lambda self, expr: sp.Pow (self._expr2spt (expr.arg), sp.S.Half, evaluate = _EVALUATE),
		'-func': lambda self, expr: self._expr2spt (expr.expression),
		'-comp': _expr2spt_comp,
		'-call': lambda self, expr: sp.Function (expr.name) (),
	}

#...............................................................................................
class spt2expr: # sympy tree (expression) -> expression tree
	def __new__ (cls, spt):
		self = super ().__new__ (cls)

		return self._spt2expr (spt)

	def _spt2expr (self, spt):
		for cls in spt.__class__.__mro__:
			func = spt2expr._spt2expr_funcs.get (cls)

			if func:
				return func (self, spt)

		raise UnsupportedOperationError (f'can not convert SymPy {spt.__class__.__name__} {spt}')

	def _spt2expr_Rational (self, spt):
		if spt.p < 0:
			return UnaryMinus (Divide (Number (int (-spt.p)), Number (int (spt.q))))

		return Divide (Number (int (spt.p)), Number (int (spt.q)))

	def _spt2expr_Add (self, spt):
		terms = spt.as_ordered_terms ()
		expr  = self._spt2expr (terms [0])

		for term in terms [1:]:
			if term.could_extract_minus_sign ():
				expr = Minus (expr, self._spt2expr (-term))
			else:
				expr = Plus (expr, self._spt2expr (term))

		return expr

	def _spt2expr_Mul (self, spt):
		if spt.could_extract_minus_sign ():
			return UnaryMinus (self._spt2expr (-spt))

		numer, denom = sp.fraction (spt)

		if denom != 1:
			return Divide (self._spt2expr (numer), self._spt2expr (denom))

		factors = [self._spt2expr (f) for f in spt.as_ordered_factors ()]
		expr    = factors [0]

		for factor in factors [1:]:
			expr = Times (expr, factor)

		return expr

	def _spt2expr_Pow (self, spt):
		base, exp = spt.args

		if exp.is_Number and exp.is_negative: # b^-n = 1 / b^n
			return Divide (Number (1), self._spt2expr (sp.Pow (base, -exp)))

		if exp == sp.S.Half:
			return mfunc.Sqrt (self._spt2expr (base))

		if exp.is_Rational and exp.p == 1 and exp.q > 1:
			return mfunc.Root (int (exp.q), self._spt2expr (base))

		return Power (self._spt2expr (base), self._spt2expr (exp))

	_spt2expr_funcs = {
		sp.Integer: lambda self, spt: Number (int (spt)),
		sp.Float: lambda self, spt: Number (float (spt)),
		sp.Rational: _spt2expr_Rational,
		sp.core.numbers.Exp1: lambda self, spt: Number (math.e),
		sp.core.numbers.Pi: lambda self, spt: Number (math.pi),
		sp.core.numbers.ComplexInfinity: lambda self, spt: _raise (UnsupportedOperationError ('can not convert complex infinity')),

		sp.Symbol: lambda self, spt: Variable (spt.name),

		sp.Add: _spt2expr_Add,
		sp.Mul: _spt2expr_Mul,
		sp.Pow: _spt2expr_Pow,
		sp.Mod: lambda self, spt: Modulo (self._spt2expr (spt.args [0]), self._spt2expr (spt.args [1])),

		sp.exp: lambda self, spt: mfunc.Exponential (self._spt2expr (spt.args [0])),
		sp.log: lambda self, spt: mfunc.Ln (self._spt2expr (spt.args [0])),
		sp.sin: lambda self, spt: mfunc.Sin (self._spt2expr (spt.args [0])),
		sp.cos: lambda self, spt: mfunc.Cos (self._spt2expr (spt.args [0])),
		sp.tan: lambda self, spt: mfunc.Tan (self._spt2expr (spt.args [0])),
		sp.asin: lambda self, spt: mfunc.Asin (self._spt2expr (spt.args [0])),
		sp.acos: lambda self, spt: mfunc.Acos (self._spt2expr (spt.args [0])),
		sp.atan: lambda self, spt: mfunc.Atan (self._spt2expr (spt.args [0])),
		sp.Abs: lambda self, spt: mfunc.Abs (self._spt2expr (spt.args [0])),
		sp.ceiling: lambda self, spt: mfunc.Ceil (self._spt2expr (spt.args [0])),
		sp.floor: lambda self, spt: mfunc.Floor (self._spt2expr (spt.args [0])),
		sp.sign: lambda self, spt: mfunc.Sgn (self._spt2expr (spt.args [0])),
	}

#...............................................................................................
def set_evaluate (state):
	global _EVALUATE
	_EVALUATE = bool (state)
