#!/usr/bin/env python

from contextlib import redirect_stdout, redirect_stderr
import io
import unittest

import mast
import mparser
from mathexpr import main

def run (*argv):
	out, err = io.StringIO (), io.StringIO ()

	with redirect_stdout (out), redirect_stderr (err):
		ret = main (list (argv))

	return ret, out.getvalue (), err.getvalue ()

class Test (unittest.TestCase):
	def tearDown (self):
		mparser.set_implicit_mul (True)
		mast.set_fixpoint_limit (32)

	def test_evaluate (self):
		self.assertEqual (run ('x^2', 'x=3'), (0, '(x ^ 2)\n9.0\n', ''))
		self.assertEqual (run ('(x^2 + cos(y)) / 3', 'x=2', 'y=pi'), (0, '(((x ^ 2) + cos(y)) / 3)\n1.0\n', ''))
		self.assertEqual (run ('2 + 3'), (0, '(2 + 3)\n5.0\n', ''))
		self.assertEqual (run ('x + y', 'x=1'), (0, '(x + y)\n', ''))
		self.assertEqual (run ('-r', 'x / 0', 'x=1'), (0, '(x / 0)\ninf\n', ''))
		self.assertEqual (run ('x * y', 'x = 2', 'y=x + 1'), (0, '(x * y)\n6.0\n', ''))

	def test_domains (self):
		self.assertEqual (run ('-V', 'v + w', 'v=1,2', 'w=3,4'), (0, '(v + w)\n[4.0, 6.0]\n', ''))
		self.assertEqual (run ('--vector', '2 v', 'v=1,2,3'), (0, '(2 * v)\n[2.0, 4.0, 6.0]\n', ''))
		self.assertEqual (run ('-i', 'x * 2', 'x=1:2'), (0, '(x * 2)\n[2.0, 4.0]\n', ''))
		self.assertEqual (run ('--interval', 'sqrt(x)', 'x=4:9'), (0, 'sqrt(x)\n[2.0, 3.0]\n', ''))

	def test_transforms (self):
		self.assertEqual (run ('-D', 'x', '-s', 'x*1 - (-5)'), (0, '1\n1.0\n', ''))
		self.assertEqual (run ('--derive=x', 'x^2', 'x=3'), (0, '((2 * (x ^ 1)) * 1)\n6.0\n', ''))
		self.assertEqual (run ('-s', 'x*1 - (-5)'), (0, '(x + 5)\n', ''))
		self.assertEqual (run ('-s', '0 - -(x)'), (0, '-(-(x))\n', ''))
		self.assertEqual (run ('-f', '0 - -(x)'), (0, 'x\n', ''))
		self.assertEqual (run ('-f', '--limit=1', '0 - -(x)'), (0, '-(-(x))\n', ''))
		self.assertEqual (run ('-S', '-s', 'x*1 - (-5)'), (0, '(x + 5)\nx + 5\n', ''))

	def test_nomul (self):
		self.assertEqual (run ('2x', 'x=3'), (0, '(2 * x)\n6.0\n', ''))
		self.assertEqual (run ('--nomul', '2 * x', 'x=3'), (0, '(2 * x)\n6.0\n', ''))

		ret, out, err = run ('--nomul', '2x')

		self.assertEqual ((ret, out), (1, ''))
		self.assertIn ('SyntaxError', err)

	def test_errors (self):
		for argv in (
				('x +',),
				('x', 'x'),
				('x', '=1'),
				('f()',),
				('-V', 'tan(v)', 'v=1,2'),
				('-i', 'sin(x)', 'x=1:2'),
				('-i', 'x', 'x=2:1'),
				('-f', '--limit=0', 'x'),
				('-D', 'x', '[1 .. 2]'),
				):
			ret, out, err = run (*argv)

			self.assertEqual (ret, 1, argv)
			self.assertTrue (err.startswith ('mathexpr: '), argv)

		ret, out, err = run ('-V', 'tan(v)', 'v=1,2')

		self.assertIn ('UnsupportedDomainError', err)

	def test_usage (self):
		ret, out, err = run ()

		self.assertEqual ((ret, out), (2, ''))
		self.assertIn ('usage:', err)

		ret, out, err = run ('--bogus')

		self.assertEqual ((ret, out), (2, ''))
		self.assertIn ('bogus', err)

		ret, out, err = run ('-h')

		self.assertEqual (ret, 0)
		self.assertTrue (out.startswith ('usage: mathexpr'))

		self.assertEqual (run ('--version'), (0, '1.0.0\n', ''))

if __name__ == '__main__':
	import os.path
	import subprocess
	import sys

	subprocess.run ([sys.executable, '-m', 'unittest', os.path.basename (sys.argv [0])])
	sys.exit (0)
