"""
Provedor Google Gemini (generateContent).
"""

from typing import Any

from product_search.core.exceptions import ProviderResponseError
from product_search.providers.base import BaseLLMProvider, LlmSearchParams, LlmSearchResult


class GeminiProvider(BaseLLMProvider):
    """
    Cliente da API Gemini.
    Força resposta em JSON via responseMimeType; o schema vai no prompt.
    """

    provider_id = "gemini"

    @property
    def base_url(self) -> str:
        return self.settings.gemini_base_url

    @property
    def timeout(self) -> float:
        return self.settings.gemini_timeout

    def build_request_body(self, params: LlmSearchParams) -> dict[str, Any]:
        """Monta o corpo da requisição generateContent."""
        return {
            "systemInstruction": {
                "parts": [{"text": params.system_prompt}],
            },
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": params.user_prompt}],
                },
            ],
            "generationConfig": {
                "maxOutputTokens": params.max_tokens,
                "temperature": params.temperature,
                "responseMimeType": "application/json",
            },
        }

    async def search(self, params: LlmSearchParams) -> LlmSearchResult:
        """
        Chama o Gemini e junta as partes de texto do primeiro candidato.

        Args:
            params: Prompts, parâmetros de geração e modelo opcional

        Returns:
            LlmSearchResult com o texto gerado

        Raises:
            ProviderError: Em falha da API ou resposta sem candidato
        """
        self.ensure_configured()
        model = params.model_override or self.settings.gemini_default_model

        log = self.log_operation("gemini_search", model=model)
        log.debug("Chamando API Gemini")

        data = await self._request(
            "POST",
            f"/v1beta/models/{model}:generateContent",
            params={"key": self.api_key},
            json=self.build_request_body(params),
        )

        candidates = data.get("candidates") or []
        content = candidates[0].get("content") if candidates else None
        if not content:
            raise ProviderResponseError(
                "Nenhum candidato retornado pelo Gemini",
                provider=self.provider_id,
                raw_data=str(data),
            )

        text = "\n".join(
            part["text"]
            for part in content.get("parts", [])
            if isinstance(part.get("text"), str) and part["text"]
        )
        tokens_used = (data.get("usageMetadata") or {}).get("totalTokenCount", 0)

        log.debug(
            "Resposta do Gemini recebida",
            length=len(text),
            tokens=tokens_used,
            preview=text[:500],
        )

        return LlmSearchResult(
            content=text,
            model=data.get("modelVersion") or model,
            tokens_used=tokens_used,
        )
