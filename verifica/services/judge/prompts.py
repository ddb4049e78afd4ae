from typing import Optional

from langchain_core.prompts import PromptTemplate


IMAGE_MARKER = "IMAGEM: Análise de imagem fornecida pelo usuário"
VAGUE_CONTENT = "Conteúdo muito curto ou indefinido fornecido para análise"

# Literal braces in the JSON example are doubled for the template engine.
VERIFICATION_PROMPT = PromptTemplate.from_template("""
Você é um verificador de fatos profissional brasileiro. Analise a seguinte informação e forneça uma verificação completa:

INFORMAÇÃO A VERIFICAR:
{analysis_content}
{evidence_block}
INSTRUÇÕES IMPORTANTES:
1. Se o conteúdo for muito vago, indefinido ou sem substância informativa (como letras aleatórias, textos sem sentido), classifique como FALSA
2. Para URLs, analise o domínio e credibilidade da fonte
3. Para imagens, analise se realmente contém informação noticiosa relevante ou se é spam/desinformação
4. USE OS RESULTADOS DA BUSCA WEB fornecidos acima para verificar informações atuais como cotações, preços, eventos recentes
5. Se os resultados da busca CONFIRMAM a informação, classifique como VERDADEIRA
6. Se os resultados da busca CONTRADIZEM a informação, classifique como FALSA
7. Se NÃO há resultados de busca ou informações insuficientes, classifique como FALSA (fake news)
8. Se encontrar informações contraditórias ou parciais, classifique como DUVIDOSA
9. Para informações factuais (cotações, preços, eventos): SEMPRE se baseie nos resultados da busca web mais recentes
10. Classifique como: VERDADEIRA (verified), FALSA (false) ou DUVIDOSA (partial)
11. Dê uma pontuação de 0-100 para veracidade (0-30 = Falsa, 31-70 = Duvidosa, 71-100 = Verdadeira)
12. Forneça explicação detalhada mencionando se foi encontrada confirmação nas buscas realizadas
13. Liste critérios analisados incluindo verificação em tempo real
14. NÃO mencione nomes de sites específicos na resposta, apenas indique "fontes verificadas" ou "busca em tempo real"

IMPORTANTE: Responda APENAS em JSON válido com esta estrutura exata:
{{
  "classification": "verified|false|partial",
  "score": 85,
  "explanation": "Explicação detalhada baseada na busca em tempo real e verificação de fontes",
  "criteria": [
    {{"name": "Verificação em tempo real", "status": true}},
    {{"name": "Confirmação em múltiplas fontes", "status": true}},
    {{"name": "Consistência com dados atuais", "status": true}}
  ],
  "sources": []
}}""")


def build_analysis_content(
    content: Optional[str] = None,
    url: Optional[str] = None,
    has_image: bool = False,
) -> str:
    """The "information to verify" block from whichever inputs are present."""
    parts = []
    if content and content.strip():
        parts.append(f"TEXTO/CONTEÚDO: {content.strip()}")
    if url and url.strip():
        parts.append(f"URL: {url.strip()}")
    if has_image:
        parts.append(IMAGE_MARKER)
    return "\n".join(parts) or VAGUE_CONTENT


def compose_prompt(
    content: Optional[str] = None,
    url: Optional[str] = None,
    has_image: bool = False,
    evidence: Optional[str] = None,
) -> str:
    evidence_block = f"\nRESULTADOS DA BUSCA WEB:\n{evidence}\n" if evidence else ""
    return VERIFICATION_PROMPT.format(
        analysis_content=build_analysis_content(content, url, has_image),
        evidence_block=evidence_block,
    )
