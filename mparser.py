# Text to expression tree parser.
#
# Precedence from loosest: '+' '-' < '*' '/' '%' and implicit multiplication < unary '-' < '^' (right associative).

from collections import OrderedDict
import logging
import math
import re

import mfunc
from mast import Number, Variable, Vector, IntervalLiteral, Plus, Minus, Times, Divide, Power, Modulo, UnaryMinus

log = logging.getLogger (__name__)

_IMPLICIT_MUL = True # adjacent operands like '2x' or 'x y' multiply

_FUNCS = {
	'exp'   : mfunc.Exponential,
	'ln'    : mfunc.Ln,
	'sqrt'  : mfunc.Sqrt,
	'sin'   : mfunc.Sin,
	'cos'   : mfunc.Cos,
	'tan'   : mfunc.Tan,
	'arcsin': mfunc.Asin,
	'arccos': mfunc.Acos,
	'arctan': mfunc.Atan,
	'asin'  : mfunc.Asin,
	'acos'  : mfunc.Acos,
	'atan'  : mfunc.Atan,
	'abs'   : mfunc.Abs,
	'ceil'  : mfunc.Ceil,
	'floor' : mfunc.Floor,
	'sgn'   : mfunc.Sgn,
}

_CONSTS = {'e': math.e, 'pi': math.pi}

_FUNCNAMES = '|'.join (sorted (list (_FUNCS) + ['log', 'nrt'], key = lambda s: -len (s)))

#...............................................................................................
class Token (str): # compares equal to its kind name, carries matched text, position and inner regex groups
	__slots__ = ['text', 'pos', 'grp']

	def __new__ (cls, kind, text, pos, grp = ()):
		self                          = str.__new__ (cls, kind)
		self.text, self.pos, self.grp = text, pos, grp

		return self

class Parser:
	TOKENS = OrderedDict ([ # first matching alternative wins so longer operators come before their prefixes
		('NUM',     r'(\d+(?:\.(?!\.)\d*)?|\.\d+)([eE][+-]?\d+)?'),
		('FUNC',   fr'({_FUNCNAMES})(?!\w)'),
		('VAR',     r'[a-zA-Z_]\w*'),
		('POW',     r'\*\*|\^'),
		('TIMES',   r'\*'),
		('DIV',     r'/'),
		('MOD',     r'%'),
		('PLUS',    r'\+'),
		('MINUS',   r'-'),
		('PARENL',  r'\('),
		('PARENR',  r'\)'),
		('BRACKL',  r'\['),
		('BRACKR',  r'\]'),
		('DOTDOT',  r'\.\.'),
		('COMMA',   r','),
		('SPACE',   r'\s+'),
	])

	_IMPLICIT_START = {'NUM', 'VAR', 'FUNC', 'PARENL'}

	def __init__ (self):
		self.kindres = {kind: re.compile (pat) for kind, pat in self.TOKENS.items ()}
		self.tokre   = re.compile ('|'.join (f'(?P<{kind}>{pat})' for kind, pat in self.TOKENS.items ()))

	def tokenize (self, text):
		tokens = []
		pos    = 0

		while pos < len (text):
			m = self.tokre.match (text, pos)

			if m is None: # single offending character, parsing stops there
				tokens.append (Token ('BAD', text [pos], pos))

				break

			kind = m.lastgroup

			if kind != 'SPACE':
				s = m.group (kind)

				tokens.append (Token (kind, s, pos, self.kindres [kind].fullmatch (s).groups ()))

			pos = m.end ()

		tokens.append (Token ('END', '', pos))

		return tokens

	#...............................................................................................
	def error (self, tok = None):
		tok = self.tok if tok is None else tok
		err = SyntaxError ( \
				'unexpected end of input' if tok == 'END' else \
				f'invalid token {tok.text!r}' if tok == 'BAD' else \
				f'invalid syntax {self.src [tok.pos : tok.pos + 16]!r}')

		err.text, err.offset = self.src, tok.pos + 1

		return err

	@property
	def tok (self):
		return self.tokens [self.tokidx]

	def peek (self, n = 1):
		return self.tokens [min (self.tokidx + n, len (self.tokens) - 1)]

	def next (self):
		tok          = self.tok
		self.tokidx += tok != 'END'

		return tok

	def expect (self, sym):
		if self.tok != sym:
			raise self.error ()

		return self.next ()

	def parse (self, src):
		log.debug ('parsing %r', src)

		self.src    = src
		self.tokens = self.tokenize (src)
		self.tokidx = 0
		expr        = self.expr ()

		if self.tok != 'END':
			raise self.error ()

		log.debug ('parsed %r -> %s', src, expr)

		return expr

	#...............................................................................................
	def expr (self):
		expr = self.term ()

		while self.tok in ('PLUS', 'MINUS'):
			cls  = Plus if self.next () == 'PLUS' else Minus
			expr = cls (expr, self.term ())

		return expr

	def term (self):
		expr = self.unary ()

		while 1:
			if self.tok in ('TIMES', 'DIV', 'MOD'):
				tok  = self.next ()
				cls  = Times if tok == 'TIMES' else Divide if tok == 'DIV' else Modulo
				expr = cls (expr, self.unary ())

			elif _IMPLICIT_MUL and self.tok in self._IMPLICIT_START:
				expr = Times (expr, self.unary ())

			else:
				return expr

	def unary (self):
		if self.tok == 'MINUS':
			self.next ()

			return UnaryMinus (self.unary ())

		if self.tok == 'PLUS':
			self.next ()

			return self.unary ()

		return self.power ()

	def power (self):
		expr = self.primary ()

		if self.tok == 'POW':
			self.next ()

			return Power (expr, self.unary ()) # right associative, allows x^-2

		return expr

	def primary (self):
		tok = self.tok

		if tok == 'NUM':
			self.next ()

			return Number (float (tok.text) if '.' in tok.text or tok.grp [1] else int (tok.text))

		if tok == 'VAR':
			return self.var ()

		if tok == 'FUNC':
			return self.func ()

		if tok == 'PARENL':
			if self.peek () == 'MINUS' and self.peek (2) == 'NUM' and self.peek (3) == 'PARENR': # '(-2)' is a negative number
				self.next (), self.next ()

				num = self.primary ()

				self.next ()

				return Number (-num.value)

			self.next ()

			expr = self.expr ()

			self.expect ('PARENR')

			return expr

		if tok == 'BRACKL':
			return self.brackets ()

		raise self.error ()

	def var (self):
		name = self.next ().text

		if name in _CONSTS:
			return Number (_CONSTS [name])

		if self.tok == 'PARENL' and self.peek () == 'PARENR': # 'f()' references a function bound in the context
			self.next (), self.next ()

			return mfunc.FunctionCall (name)

		return Variable (name)

	def func (self):
		tok  = self.next ()
		name = tok.grp [0]

		self.expect ('PARENL')

		args = [self.expr ()]

		while self.tok == 'COMMA':
			self.next ()
			args.append (self.expr ())

		self.expect ('PARENR')

		if name == 'log':
			if len (args) == 1:
				return mfunc.Log (Number (10), args [0])

			if len (args) == 2:
				return mfunc.Log (*args)

		elif name == 'nrt':
			if len (args) == 2:
				n = args [0]

				if not (n.is_num and isinstance (n.value, int) and n.value >= 1):
					raise SyntaxError (f'nrt() root index must be a positive integer literal, not {n}')

				return mfunc.Root (n.value, args [1])

		elif len (args) == 1:
			return _FUNCS [name] (args [0])

		raise SyntaxError (f'{name}() does not take {len (args)} arguments')

	def brackets (self): # '[a, b, ...]' vector or '[a .. b]' interval
		self.next ()

		elems = [self.expr ()]

		if self.tok == 'DOTDOT':
			self.next ()

			expr = IntervalLiteral (elems [0], self.expr ())

			self.expect ('BRACKR')

			return expr

		while self.tok == 'COMMA':
			self.next ()
			elems.append (self.expr ())

		self.expect ('BRACKR')

		return Vector (elems)

#...............................................................................................
def set_implicit_mul (state):
	global _IMPLICIT_MUL
	_IMPLICIT_MUL = bool (state)

_parser = Parser ()

def parse (text):
	return _parser.parse (text)
