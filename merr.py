# Error kinds raised by expression evaluation and transforms.
#
# Each error also derives from the closest builtin so callers can catch either.

class MathExprError (Exception):
	pass

class UnboundVariableError (MathExprError, NameError): # variable has no binding reachable through the context chain
	def __init__ (self, name):
		super ().__init__ (f'variable {name!r} is not bound')

		self.name = name

class UnboundFunctionError (MathExprError, NameError): # function call name not bound in the context chain
	def __init__ (self, name):
		super ().__init__ (f'function {name!r} is not bound')

		self.name = name

class UnsupportedDomainError (MathExprError, NotImplementedError):
	def __init__ (self, what, type):
		super ().__init__ (f'can not evaluate {what} on {type.name}')

		self.what, self.type = what, type

class UnsupportedDimensionError (MathExprError, NotImplementedError):
	pass

class UnsupportedOperationError (MathExprError, TypeError):
	pass
