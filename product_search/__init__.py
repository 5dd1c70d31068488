"""
Busca de produtos via IA.
Transforma respostas de modelos de linguagem e do Google Shopping
em listas de produtos validadas e ranqueadas.
"""

__version__ = "0.1.0"
