"""
Provedor Perplexity (chat completions com busca na web).
"""

from typing import Any

from product_search.core.exceptions import ProviderResponseError
from product_search.providers.base import BaseLLMProvider, LlmSearchParams, LlmSearchResult


def normalize_images(images: list[Any]) -> list[str]:
    """Converte a lista de imagens da Perplexity em URLs simples."""
    urls = []
    for img in images or []:
        url = img if isinstance(img, str) else (img or {}).get("image_url")
        if url:
            urls.append(url)
    return urls


class PerplexityProvider(BaseLLMProvider):
    """Cliente da API Perplexity."""

    provider_id = "perplexity"

    @property
    def base_url(self) -> str:
        return self.settings.perplexity_base_url

    @property
    def timeout(self) -> float:
        return self.settings.perplexity_timeout

    async def search(self, params: LlmSearchParams) -> LlmSearchResult:
        """
        Chama a Perplexity pedindo imagens e citações.

        Args:
            params: Prompts e parâmetros de geração

        Returns:
            LlmSearchResult com texto, imagens e citações

        Raises:
            ProviderError: Em falha da API ou resposta sem escolha
        """
        self.ensure_configured()
        model = params.model_override or self.settings.perplexity_model

        body = {
            "model": model,
            "messages": [
                {"role": "system", "content": params.system_prompt},
                {"role": "user", "content": params.user_prompt},
            ],
            "max_tokens": params.max_tokens,
            "temperature": params.temperature,
            "return_citations": True,
            "return_images": True,
        }

        self.logger.debug("Chamando API Perplexity", model=model)

        data = await self._request(
            "POST",
            "/chat/completions",
            json=body,
            headers={"Authorization": f"Bearer {self.api_key}"},
        )

        choices = data.get("choices") or []
        message = choices[0].get("message") if choices else None
        if not message or not isinstance(message.get("content"), str):
            raise ProviderResponseError(
                "Nenhuma resposta retornada pela Perplexity",
                provider=self.provider_id,
                raw_data=str(data),
            )

        images = normalize_images(data.get("images") or [])
        citations = [c for c in data.get("citations") or [] if isinstance(c, str)]

        self.logger.debug(
            "Resposta da Perplexity recebida",
            tokens=(data.get("usage") or {}).get("total_tokens", 0),
            finish_reason=choices[0].get("finish_reason"),
            images=len(images),
            citations=len(citations),
        )

        return LlmSearchResult(
            content=message["content"],
            model=data.get("model") or model,
            tokens_used=(data.get("usage") or {}).get("total_tokens", 0),
            images=images,
            citations=citations,
        )
