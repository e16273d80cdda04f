# Evaluation domains and the hierarchical variable / function binding store.

import logging

from merr import UnboundVariableError, UnboundFunctionError
from mvals import EvaluationType
from mast import Variable, to_expr

log = logging.getLogger (__name__)

class ContextModel:
	'''Variable and function bindings used during evaluation.

	A child scope created with create_child_scope() keeps a reference to its
	parent and falls through to it for names it does not bind itself. Binding
	a name in the child only shadows the parent, the parent is never modified
	and never references its children.
	'''

	def __init__ (self, parent = None):
		self.parent    = parent
		self.variables = {} # {'name': Expr, ...}
		self.functions = {} # {'name': MathFunction, ...}

	def create_child_scope (self):
		log.debug ('creating child scope of %s', self)

		return ContextModel (self)

	def bind_variable (self, var, expr):
		name = var.name if isinstance (var, Variable) else var

		if not isinstance (name, str) or not name:
			raise TypeError (f'can only bind named variables, not {var!r}')

		return self.bind_variable_name (name, expr)

	def bind_variable_name (self, name, expr):
		expr = to_expr (expr)

		log.debug ('binding variable %s = %s', name, expr)

		self.variables [name] = expr

		return self # convenience

	def bind_function (self, name, func):
		if not getattr (func, 'is_func', False):
			raise TypeError (f'can only bind functions, not {func!r}')

		log.debug ('binding function %s = %s', name, func)

		self.functions [name] = func

		return self

	def get_expression (self, name):
		ctx = self

		while ctx is not None:
			expr = ctx.variables.get (name)

			if expr is not None:
				return expr

			ctx = ctx.parent

		raise UnboundVariableError (name)

	def get_function (self, name):
		ctx = self

		while ctx is not None:
			func = ctx.functions.get (name)

			if func is not None:
				return func

			ctx = ctx.parent

		raise UnboundFunctionError (name)

	def __str__ (self):
		vars  = ', '.join (f'{n} = {e}' for n, e in self.variables.items ())
		funcs = ', '.join (str (f) for f in self.functions.values ())

		return f'ContextModel[PARENT: {"yes" if self.parent else "none"}, VARS: {{{vars}}}, FUNCS: {{{funcs}}}]'

	__repr__ = __str__
