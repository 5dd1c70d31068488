"""
Amostras de respostas de modelos de linguagem e de provedores.
Simulam os formatos (válidos e quebrados) vistos em produção.
"""

import json

VALID_RESPONSE = json.dumps(
    {
        "products": [
            {
                "name": "Fone de Ouvido JBL Tune 520BT",
                "description": "Fone bluetooth on-ear com até 57 horas de bateria",
                "brand": "JBL",
                "category": "Áudio",
                "price": {"value": 249.9, "min": 229.9, "max": 299.9, "currency": "BRL"},
                "source": {
                    "name": "Amazon",
                    "url": "https://www.amazon.com.br/dp/B0BS1QCFHX",
                },
                "image_url": "https://m.media-amazon.com/images/I/61jbl.jpg",
                "specs": ["Bluetooth 5.3", "57h de bateria"],
                "rating": 4.7,
                "availability": "Disponível",
            },
            {
                "name": "Fone Sony WH-CH520",
                "description": "Fone sem fio com microfone",
                "price": {"value": 299.0, "currency": "BRL"},
                "source": {
                    "name": "Magazine Luiza",
                    "url": "https://www.magazineluiza.com.br/fone-sony/p/236528700/",
                },
                "specs": ["Bluetooth 5.2"],
                "rating": 4.5,
            },
        ],
        "search_summary": "Fones bluetooth populares no Brasil",
    },
    ensure_ascii=False,
)

FENCED_RESPONSE = """Aqui estão os produtos encontrados:

```json
{
  "products": [
    {"name": "Mouse Logitech M170", "price": {"value": 59.9}},
  ],
  "search_summary": "Mouses sem fio",
}
```

Espero ter ajudado!"""

MISSING_COMMA_RESPONSE = (
    '{"products": [{"name": "Teclado Redragon Kumara"}'
    '\n{"name": "Teclado Logitech K120"}], "search_summary": "Teclados"}'
)

TRUNCATED_RESPONSE = (
    '{"products": [{"name": "Smart TV Samsung 50", "price": {"value": 2199.0}},'
    ' {"name": "Smart TV LG 55", "price": {"value": 2599.0}}'
)

PROSE_WITH_PRODUCTS_ARRAY = (
    'Resultado: "products": [{"name": "Cafeteira Nespresso Essenza"}, '
    '{"name": "Cafeteira Oster Inox"}] e mais nada'
)

MIXED_VALIDITY_RESPONSE = json.dumps(
    {
        "products": [
            {"name": "Notebook Dell Inspiron 15", "price": {"value": 3899.0}},
            {"name": "TV"},
            {"name": "Monitor LG UltraGear 27", "rating": 7},
            {"name": "Headset HyperX Cloud II", "relevance_score": 0.99},
        ],
        "search_summary": "Eletrônicos",
    }
)

DUPLICATES_RESPONSE = json.dumps(
    {
        "products": [
            {"name": "Fone X", "price": {"value": 100}},
            {"name": "fone x", "price": {"value": 90}},
        ],
        "search_summary": "ok",
    }
)

SEARCH_URL_RESPONSE = json.dumps(
    {
        "products": [
            {
                "name": "Notebook Lenovo IdeaPad 3",
                "source": {"name": "Amazon", "url": "https://www.amazon.com.br/s?k=notebook+lenovo"},
            },
            {
                "name": "Notebook Acer Aspire 5",
                "source": {"name": "Kabum", "url": "https://www.kabum.com.br/produto/123456/notebook-acer"},
            },
            {"name": "Notebook Asus Vivobook", "description": "Sem link de loja"},
        ],
        "search_summary": "Notebooks",
    }
)


# RESPOSTAS DE API

GEMINI_API_RESPONSE = {
    "candidates": [
        {
            "content": {
                "role": "model",
                "parts": [{"text": VALID_RESPONSE}],
            },
            "finishReason": "STOP",
        }
    ],
    "usageMetadata": {"totalTokenCount": 1234},
    "modelVersion": "gemini-2.5-flash",
}

PERPLEXITY_API_RESPONSE = {
    "model": "sonar-pro",
    "choices": [
        {
            "message": {"role": "assistant", "content": VALID_RESPONSE},
            "finish_reason": "stop",
        }
    ],
    "usage": {"total_tokens": 987},
    "images": [
        "https://cdn.example.com/img1.jpg",
        {"image_url": "https://cdn.example.com/img2.jpg", "origin_url": "https://loja.example/p/1"},
    ],
    "citations": ["https://www.amazon.com.br/dp/B0BS1QCFHX"],
}

SERPAPI_API_RESPONSE = {
    "search_metadata": {
        "id": "abc123",
        "status": "Success",
        "google_shopping_url": "https://www.google.com.br/search?tbm=shop&q=iphone+15",
    },
    "shopping_results": [
        {
            "position": 1,
            "title": "Apple iPhone 15 128GB Preto",
            "link": "https://www.magazineluiza.com.br/iphone-15/p/237184700/",
            "source": "Magazine Luiza",
            "price": "R$ 4.999,00",
            "extracted_price": 4999.0,
            "old_price": "R$ 5.499,00",
            "extracted_old_price": 5499.0,
            "rating": 4.8,
            "thumbnail": "https://encrypted-tbn0.gstatic.com/shopping?q=tbn:iphone15",
            "delivery": "Frete grátis",
            "extensions": ["128 GB", "Tela 6,1\""],
        },
        {
            "position": 2,
            "title": "iPhone 15 Apple 128GB Azul",
            "product_link": "https://www.google.com.br/shopping/product/123456789",
            "source": "Casas Bahia",
            "price": "R$ 4.799,00",
            "extracted_price": 4799.0,
            "thumbnail": "https://encrypted-tbn0.gstatic.com/shopping?q=tbn:iphone15azul",
        },
    ],
}
