#!/usr/bin/env python3
# python 3.6+

# Command line front end and public names of the expression engine.

import getopt
import logging
import os
import sys

from merr import (MathExprError, UnboundVariableError, UnboundFunctionError, UnsupportedDomainError,
		UnsupportedDimensionError, UnsupportedOperationError)
from mvals import EvaluationType, Vec, Interval
from mctx import ContextModel
from mast import (Expr, Number, Variable, BoundVariable, Vector, IntervalLiteral, Plus, Minus, Times, Divide, Power,
		Modulo, UnaryMinus, simplify_fixpoint, set_fixpoint_limit)
from mfunc import (MathFunction, DefaultFunction, Exponential, Log, Ln, Root, Sqrt, Sin, Cos, Tan, Asin, Acos, Atan,
		Abs, Ceil, Floor, Sgn, CustomFunction, CompositeFunction, FunctionCall)
from mparser import parse, set_implicit_mul

log = logging.getLogger (__name__)

_VERSION        = '1.0.0'

_MATHEXPR_DEBUG = os.environ.get ('MATHEXPR_DEBUG')

_HELP           = f'usage: mathexpr [options] expression [name=value ...]' '''

  -h, --help               - Show help information
  -v, --version            - Show version string
  -d, --debug              - Log debug info to stderr
  -r, --real               - Evaluate as real number (default)
  -V, --vector             - Evaluate as vector, bind values as name=a,b,c
  -i, --interval           - Evaluate as interval, bind values as name=lo:hi
  -D, --derive=var         - Differentiate with respect to var before anything else
  -s, --simplify           - Simplify with a single pass
  -f, --fixpoint           - Simplify repeatedly until the expression stops changing
  -S, --sympy              - Print SymPy form of expression
  --nomul                  - Turn off implicit multiplication
  --limit=N                - Maximum number of passes for --fixpoint
'''.lstrip ()

_OPTS_SHORT     = 'hvdrViD:sfS'
_OPTS_LONG      = ['help', 'version', 'debug', 'real', 'vector', 'interval', 'derive=', 'simplify', 'fixpoint', 'sympy',
	'nomul', 'limit=']

def _parse_value (text):
	if ':' in text:
		lo, hi = text.split (':', 1)

		return IntervalLiteral (parse (lo), parse (hi))

	if ',' in text:
		return Vector (parse (t) for t in text.split (','))

	return parse (text)

def _bind_args (ctx, args):
	for arg in args:
		name, eq, value = arg.partition ('=')

		if not eq or not name:
			raise ValueError (f'invalid binding {arg!r}, expecting name=value')

		ctx.bind_variable_name (name.strip (), _parse_value (value))

	return ctx

def main (argv = None):
	global _MATHEXPR_DEBUG

	try:
		opts, args = getopt.getopt (sys.argv [1:] if argv is None else argv, _OPTS_SHORT, _OPTS_LONG)
	except getopt.GetoptError as e:
		print (f'mathexpr: {e}', file = sys.stderr)

		return 2

	opts = dict (opts)

	if '--help' in opts or '-h' in opts:
		print (_HELP)

		return 0

	if '--version' in opts or '-v' in opts:
		print (_VERSION)

		return 0

	if '--debug' in opts or '-d' in opts:
		_MATHEXPR_DEBUG = os.environ ['MATHEXPR_DEBUG'] = '1'

	logging.basicConfig (level = logging.DEBUG if _MATHEXPR_DEBUG else logging.WARNING, format = '%(name)s: %(message)s')

	if not args:
		print (_HELP, file = sys.stderr)

		return 2

	if '--nomul' in opts:
		set_implicit_mul (False)

	type = \
			EvaluationType.VECTOR if '--vector' in opts or '-V' in opts else \
			EvaluationType.INTERVAL if '--interval' in opts or '-i' in opts else \
			EvaluationType.REAL

	try:
		if '--limit' in opts:
			set_fixpoint_limit (int (opts ['--limit']))

		expr = parse (args [0])
		ctx  = _bind_args (ContextModel (), args [1:])
		var  = opts.get ('--derive', opts.get ('-D'))

		if var:
			log.debug ('deriving %s by %s', expr, var)

			expr = expr.derive (var)

		if '--fixpoint' in opts or '-f' in opts:
			expr = simplify_fixpoint (expr)
		elif '--simplify' in opts or '-s' in opts:
			expr = expr.simplify ()

		print (expr)

		if '--sympy' in opts or '-S' in opts:
			import msym # sympy slow to import so only when asked

			print (msym.expr2spt (expr))

		if expr.free_vars <= set (ctx.variables): # everything bound, give value
			log.debug ('evaluating %s as %s in %s', expr, type.name, ctx)

			print (expr.evaluate (type, ctx))

	except (MathExprError, SyntaxError, ValueError, ZeroDivisionError) as e:
		print (f'mathexpr: {e.__class__.__name__}: {e}', file = sys.stderr)

		return 1

	return 0

if __name__ == '__main__':
	sys.exit (main ())
