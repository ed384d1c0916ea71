"""Password generation and strength scoring (not security critical)."""
from __future__ import annotations
import re, secrets, string
from typing import List, NamedTuple

SYMBOLS = '!@#$%^&*()_+-=[]{}|;:,.<>?'

class PasswordStrength(NamedTuple):
	score: int
	label: str
	suggestions: List[str]

def generate_password(length: int = 16, uppercase: bool = True, lowercase: bool = True,
		numbers: bool = True, symbols: bool = True) -> str:
	if length < 1:
		raise ValueError('Length must be positive')
	charset = ''
	if uppercase: charset += string.ascii_uppercase
	if lowercase: charset += string.ascii_lowercase
	if numbers: charset += string.digits
	if symbols: charset += SYMBOLS
	if not charset:
		charset = string.ascii_lowercase
	return ''.join(secrets.choice(charset) for _ in range(length))

def check_password_strength(password: str) -> PasswordStrength:
	score = 0; suggestions = []
	L = len(password)
	for threshold, points in ((8, 10), (12, 15), (16, 15), (20, 10)):
		if L >= threshold: score += points
	if L < 8: suggestions.append('Use at least 8 characters')
	classes = [
		(r'[a-z]', 10, 'Add lowercase letters'),
		(r'[A-Z]', 10, 'Add uppercase letters'),
		(r'[0-9]', 10, 'Add numbers'),
		(r'[^a-zA-Z0-9]', 15, 'Add special characters'),
	]
	variety = 0
	for pattern, points, hint in classes:
		if re.search(pattern, password):
			score += points; variety += 1
		else:
			suggestions.append(hint)
	score += variety * 5
	if re.search(r'(.)\1{2,}', password):
		score -= 10; suggestions.append('Avoid repeated characters')
	if re.fullmatch(r'[a-zA-Z]+|[0-9]+', password):
		score -= 10
	score = max(0, min(100, score))
	if score < 30: label = 'weak'
	elif score < 50: label = 'fair'
	elif score < 75: label = 'good'
	else: label = 'strong'
	return PasswordStrength(score, label, suggestions)
