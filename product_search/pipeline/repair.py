"""
Regras de reparo de JSON malformado.
Cada regra é uma função pura str -> str, testável isoladamente.
A cadeia completa é idempotente: reparar duas vezes dá o mesmo resultado.
"""

import re
from typing import Callable, Iterator

RepairRule = Callable[[str], str]

_LEADING_FENCE = re.compile(r"^\s*```[\w-]*")
_TRAILING_FENCE = re.compile(r"\s*```\s*$")
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_DANGLING_COMMA = re.compile(r",\s*$")
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

# Fechamento seguido de abertura, separados apenas por espaço
_MISSING_COMMA_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"\}(\s*)\{"), r"},\1{"),
    (re.compile(r"\}(\s*)\""), r'},\1"'),
    (re.compile(r"\](\s*)\{"), r"],\1{"),
    (re.compile(r"\](\s*)\""), r'],\1"'),
    (re.compile(r"\"(\s*)\{"), r'",\1{'),
    (re.compile(r"\"(\s*)\["), r'",\1['),
]


def iter_structural_chars(text: str) -> Iterator[tuple[int, str]]:
    """
    Itera sobre os caracteres fora de strings JSON.

    Aspas escapadas dentro de strings são respeitadas.

    Yields:
        Tuplas (índice, caractere)
    """
    in_string = False
    escaped = False
    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
            continue
        yield i, ch


def ends_inside_string(text: str) -> bool:
    """Indica se o texto termina com uma string JSON ainda aberta."""
    in_string = False
    escaped = False
    for ch in text:
        if escaped:
            escaped = False
        elif in_string and ch == "\\":
            escaped = True
        elif ch == '"':
            in_string = not in_string
    return in_string


def strip_bom_and_fences(text: str) -> str:
    """Remove BOM e marcadores de bloco de código no início e no fim."""
    text = text.lstrip("\ufeff")
    text = _LEADING_FENCE.sub("", text)
    return _TRAILING_FENCE.sub("", text).strip()


def trim_leading_text(text: str) -> str:
    """Descarta qualquer texto antes do primeiro '{' ou '['."""
    positions = [p for p in (text.find("{"), text.find("[")) if p >= 0]
    if not positions:
        return text
    return text[min(positions):]


def remove_trailing_commas(text: str) -> str:
    """Remove vírgulas antes de '}' ou ']' até não haver mais mudanças."""
    while True:
        fixed = _TRAILING_COMMA.sub(r"\1", text)
        if fixed == text:
            return fixed
        text = fixed


def insert_missing_commas(text: str) -> str:
    """Insere uma vírgula entre valores adjacentes sem separador."""
    for pattern, replacement in _MISSING_COMMA_RULES:
        text = pattern.sub(replacement, text)
    return text


def strip_control_characters(text: str) -> str:
    """Remove caracteres de controle, exceto \\n, \\r e \\t."""
    return _CONTROL_CHARS.sub("", text)


def close_unterminated_string(text: str) -> str:
    """Fecha string truncada quando o texto termina dentro de uma string."""
    if ends_inside_string(text):
        return text + '"'
    return text


def balance_brackets(text: str) -> str:
    """
    Fecha colchetes e chaves abertos de um documento truncado.

    Os caracteres dentro de strings não são contados. Colchetes
    são anexados antes das chaves.
    """
    counts = {"{": 0, "}": 0, "[": 0, "]": 0}
    for _, ch in iter_structural_chars(text):
        if ch in counts:
            counts[ch] += 1

    missing_brackets = max(counts["["] - counts["]"], 0)
    missing_braces = max(counts["{"] - counts["}"], 0)
    if not missing_brackets and not missing_braces:
        return text

    text = _DANGLING_COMMA.sub("", text)
    return text + "]" * missing_brackets + "}" * missing_braces


# Ordem importa: a cadeia roda da primeira para a última regra
REPAIR_RULES: list[tuple[str, RepairRule]] = [
    ("strip_bom_and_fences", strip_bom_and_fences),
    ("trim_leading_text", trim_leading_text),
    ("remove_trailing_commas", remove_trailing_commas),
    ("insert_missing_commas", insert_missing_commas),
    ("strip_control_characters", strip_control_characters),
    ("close_unterminated_string", close_unterminated_string),
    ("balance_brackets", balance_brackets),
]


def repair_json(text: str) -> str:
    """
    Aplica a cadeia completa de reparos.

    Args:
        text: Texto JSON possivelmente malformado

    Returns:
        Texto reparado (não garante que seja JSON válido)
    """
    for _, rule in REPAIR_RULES:
        text = rule(text)
    return text
