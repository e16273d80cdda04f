#!/usr/bin/env python

import math
import unittest

import mparser
from mparser import parse
from mvals import EvaluationType, Vec, Interval
from mctx import ContextModel
from mast import Number, Variable, Vector, IntervalLiteral, Plus, Minus, Times, Divide, Power, Modulo, UnaryMinus
from mfunc import Exponential, Log, Ln, Root, Sqrt, Sin, Cos, Asin, Atan, Abs, Floor, FunctionCall, CustomFunction

x, y = Variable ('x'), Variable ('y')

def p (text):
	return parse (text)

class Test (unittest.TestCase):
	def test_numbers (self):
		self.assertEqual (p ('1'), Number (1))
		self.assertIsInstance (p ('1').value, int)
		self.assertIsInstance (p ('1.').value, float)
		self.assertEqual (p ('1.5'), Number (1.5))
		self.assertEqual (p ('.5'), Number (.5))
		self.assertEqual (p ('1e3'), Number (1000.))
		self.assertIsInstance (p ('1e3').value, float)
		self.assertEqual (p ('2.5E-1'), Number (.25))
		self.assertEqual (p ('(-5)'), Number (-5))
		self.assertEqual (p ('(-1.5)'), Number (-1.5))
		self.assertEqual (p ('-5'), UnaryMinus (5))
		self.assertEqual (p ('e'), Number (math.e))
		self.assertEqual (p ('pi'), Number (math.pi))

	def test_operators (self):
		self.assertEqual (p ('x'), x)
		self.assertEqual (p ('x_1'), Variable ('x_1'))
		self.assertEqual (p ('x + y'), Plus (x, y))
		self.assertEqual (p ('x - y - 1'), Minus (Minus (x, y), 1))
		self.assertEqual (p ('x + y * 2'), Plus (x, Times (y, 2)))
		self.assertEqual (p ('(x + y) * 2'), Times (Plus (x, y), 2))
		self.assertEqual (p ('x / y % 2'), Modulo (Divide (x, y), 2))
		self.assertEqual (p ('x ^ y ^ 2'), Power (x, Power (y, 2)))
		self.assertEqual (p ('x ** 2'), Power (x, 2))
		self.assertEqual (p ('-x ^ 2'), UnaryMinus (Power (x, 2)))
		self.assertEqual (p ('x ^ -2'), Power (x, UnaryMinus (2)))
		self.assertEqual (p ('--x'), UnaryMinus (UnaryMinus (x)))
		self.assertEqual (p ('+x'), x)
		self.assertEqual (p ('x * -y'), Times (x, UnaryMinus (y)))
		self.assertEqual (p ('(-x)'), UnaryMinus (x))

	def test_implicit_mul (self):
		self.assertEqual (p ('2x'), Times (2, x))
		self.assertEqual (p ('x y'), Times (x, y))
		self.assertEqual (p ('2 (x + 1)'), Times (2, Plus (x, 1)))
		self.assertEqual (p ('2 sin(x)'), Times (2, Sin (x)))
		self.assertEqual (p ('2x^2'), Times (2, Power (x, 2)))
		self.assertEqual (p ('x - 2y'), Minus (x, Times (2, y)))
		self.assertEqual (p ('sinx'), Variable ('sinx'))

		mparser.set_implicit_mul (False)

		try:
			self.assertRaises (SyntaxError, p, '2x')
			self.assertRaises (SyntaxError, p, 'x y')
			self.assertEqual (p ('2 * x'), Times (2, x))

		finally:
			mparser.set_implicit_mul (True)

	def test_functions (self):
		self.assertEqual (p ('sin(x)'), Sin (x))
		self.assertEqual (p ('cos(x + 1)'), Cos (Plus (x, 1)))
		self.assertEqual (p ('exp(2x)'), Exponential (Times (2, x)))
		self.assertEqual (p ('ln(x)'), Ln (x))
		self.assertEqual (p ('log(x)'), Log (10, x))
		self.assertEqual (p ('log(2, x)'), Log (2, x))
		self.assertEqual (p ('sqrt(x)'), Sqrt (x))
		self.assertEqual (p ('nrt(3, x)'), Root (3, x))
		self.assertEqual (p ('arcsin(x)'), Asin (x))
		self.assertEqual (p ('asin(x)'), Asin (x))
		self.assertEqual (p ('atan(x)'), Atan (x))
		self.assertEqual (p ('abs(x - y)'), Abs (Minus (x, y)))
		self.assertEqual (p ('floor(x / 2)'), Floor (Divide (x, 2)))
		self.assertEqual (p ('sin(cos(x))'), Sin (Cos (x)))
		self.assertEqual (p ('f()'), FunctionCall ('f'))
		self.assertEqual (p ('f (x)'), Times (Variable ('f'), x))

	def test_brackets (self):
		self.assertEqual (p ('[1, x]'), Vector ([1, x]))
		self.assertEqual (p ('[x]'), Vector ([x]))
		self.assertEqual (p ('[1 .. 2]'), IntervalLiteral (1, 2))
		self.assertEqual (p ('[1..2]'), IntervalLiteral (1, 2))
		self.assertEqual (p ('[-x .. x + 1]'), IntervalLiteral (UnaryMinus (x), Plus (x, 1)))
		self.assertEqual (p ('[1, 2] * 3'), Times (Vector ([1, 2]), 3))

	def test_errors (self):
		for text in ('', 'x +', '(x', 'x)', '2 $ 3', 'sin x', 'sin()', 'sin(x, y)', 'log(1, 2, 3)', 'nrt(x)',
				'nrt(x, 2)', 'nrt(2.5, x)', 'nrt(0, x)', '[1, 2', '[1 .. 2, 3]', '[]', '* x', 'x ^'):
			self.assertRaises (SyntaxError, p, text)

		try:
			p ('x + $')
		except SyntaxError as e:
			self.assertEqual (e.offset, 5)
			self.assertEqual (e.text, 'x + $')
			self.assertIn ('$', str (e))

		try:
			p ('x +')
		except SyntaxError as e:
			self.assertEqual (str (e), 'unexpected end of input')

	def test_round_trip (self):
		for expr in (
				Plus (x, 1),
				Minus (x, Number (-2)),
				Times (Plus (x, y), Divide (x, 3)),
				Power (x, Power (y, 2)),
				Power (Power (x, y), 2),
				Modulo (x, 2.5),
				UnaryMinus (x),
				UnaryMinus (Number (2)),
				UnaryMinus (Number (-2)),
				UnaryMinus (Plus (x, y)),
				Power (UnaryMinus (y), 2),
				Power (UnaryMinus (Number (1e-3)), Modulo (3, 2)),
				Power (UnaryMinus (Plus (x, 1)), Root (1, y)),
				Power (x, UnaryMinus (Power (UnaryMinus (y), 2))),
				Number (1e20),
				Number (1.5e-7),
				Sin (Plus (x, 1)),
				Log (2, x),
				Log (Plus (x, 1), Times (x, y)),
				Root (3, Minus (x, 1)),
				Sqrt (x),
				Abs (Number (-2)),
				Exponential (UnaryMinus (x)),
				Vector ([x, Plus (y, 1)]),
				IntervalLiteral (Number (-1), Number (2)),
				FunctionCall ('g'),
				):
			self.assertEqual (p (str (expr)), expr, str (expr))

	def test_round_trip_value (self):
		ctx = ContextModel ().bind_variable_name ('y', 3)

		for expr in (Power (UnaryMinus (y), 2), Times (UnaryMinus (y), 2), Modulo (UnaryMinus (y), 2), Power (2, UnaryMinus (y))):
			self.assertEqual (p (str (expr)).evaluate (EvaluationType.REAL, ctx), expr.evaluate (EvaluationType.REAL, ctx), str (expr))

		self.assertEqual (p (str (Power (UnaryMinus (y), 2))).evaluate (EvaluationType.REAL, ctx), 9.)

	def test_tokenize (self):
		toks = mparser.Parser ().tokenize ('2.5e1*sin(x_1) .. $')

		self.assertEqual (toks, ['NUM', 'TIMES', 'FUNC', 'PARENL', 'VAR', 'PARENR', 'DOTDOT', 'BAD', 'END'])
		self.assertEqual ((toks [0].text, toks [0].grp), ('2.5e1', ('2.5', 'e1')))
		self.assertEqual ((toks [2].text, toks [2].grp), ('sin', ('sin',)))
		self.assertEqual ([t.pos for t in toks], [0, 5, 6, 9, 10, 13, 15, 18, 18])

	def test_evaluate (self): # parse, bind, evaluate
		ctx = ContextModel ().bind_variable_name ('x', 2).bind_variable_name ('y', math.pi)

		self.assertEqual (p ('(x^2 + cos(y)) / 3').evaluate (EvaluationType.REAL, ctx), 1.)
		self.assertEqual (p ('2x + 1').evaluate (EvaluationType.REAL, ctx), 5.)
		self.assertEqual (p ('[x, 2x] + [1, 1]').evaluate (EvaluationType.VECTOR, ctx), Vec (3, 5))
		self.assertEqual (p ('[1 .. 2] * x').evaluate (EvaluationType.INTERVAL, ctx), Interval (2, 4))

		ctx.bind_function ('dbl', CustomFunction ('dbl', [x], p ('x * 2')))

		self.assertEqual (p ('dbl() + 1').evaluate (EvaluationType.REAL, ctx), 5.)

	def test_simplify_derive (self):
		expr = p ('x*1 - (-5)')

		self.assertEqual (expr, Minus (Times (x, 1), Number (-5)))
		self.assertEqual (expr.simplify (), Plus (x, 5))
		self.assertEqual (str (expr.simplify ()), '(x + 5)')
		self.assertEqual (expr.derive ('x').simplify (), Number (1))

if __name__ == '__main__':
	import os.path
	import subprocess
	import sys

	subprocess.run ([sys.executable, '-m', 'unittest', os.path.basename (sys.argv [0])])
	sys.exit (0)
