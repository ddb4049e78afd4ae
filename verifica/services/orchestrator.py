import logging
from typing import Annotated, Optional, TypedDict

from langgraph.graph import StateGraph, START, END

from verifica.core.config import Config, config
from verifica.core.errors import ConfigurationError, InvalidRequest
from verifica.core.models import ImageUpload, Verdict, VerificationRecord, VerificationRequest
from verifica.services.judge.agent import VerdictJudge
from verifica.services.judge.parser import parse_verdict
from verifica.services.judge.prompts import compose_prompt
from verifica.services.llm_wrapper import LLMWrapper
from verifica.services.search.agent import EvidenceGatherer
from verifica.services.search.triggers import needs_search
from verifica.services.storage.archiver import ImageArchiver
from verifica.services.storage.client import SupabaseClient
from verifica.services.storage.store import VerificationStore


logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class WorkflowState(TypedDict):
    content: Optional[str]
    url: Optional[str]
    image: Optional[ImageUpload]
    evidence: Annotated[Optional[str], "Formatted web evidence, if searched"]
    prompt: Annotated[str, "Composed judge prompt"]
    raw_judgment: Annotated[str, "Raw judge reply"]
    verdict: Annotated[Optional[Verdict], "Parsed verdict"]
    image_url: Annotated[Optional[str], "Public URL of the archived image"]
    record: Annotated[Optional[VerificationRecord], "Persisted verification"]


class VerificationPipeline:
    """
    Single-pass verification of one request:
    (search?) -> compose -> judge -> parse -> (archive?) -> persist.

    Judge and persistence failures abort the run by raising; search and
    archive failures degrade in place.
    """

    def __init__(
        self,
        settings: Config = config,
        gatherer: Optional[EvidenceGatherer] = None,
        judge: Optional[VerdictJudge] = None,
        archiver: Optional[ImageArchiver] = None,
        store: Optional[VerificationStore] = None,
    ):
        self.settings = settings
        supabase = SupabaseClient(settings)
        self.gatherer = gatherer or EvidenceGatherer(settings)
        self.judge = judge or VerdictJudge(LLMWrapper(settings))
        self.archiver = archiver or ImageArchiver(supabase, settings.IMAGES_BUCKET)
        self.store = store or VerificationStore(supabase, settings.VERIFICATIONS_TABLE)
        self.graph = self._build_graph()

    # === Nodes ===
    async def search_node(self, state: WorkflowState) -> WorkflowState:
        logger.info("Content requires web search for verification")
        state["evidence"] = await self.gatherer.run(state["content"].strip())
        return state

    async def compose_node(self, state: WorkflowState) -> WorkflowState:
        state["prompt"] = compose_prompt(
            content=state.get("content"),
            url=state.get("url"),
            has_image=state.get("image") is not None,
            evidence=state.get("evidence"),
        )
        return state

    async def judge_node(self, state: WorkflowState) -> WorkflowState:
        state["raw_judgment"] = await self.judge.run(state["prompt"])
        return state

    async def parse_node(self, state: WorkflowState) -> WorkflowState:
        verdict = parse_verdict(state["raw_judgment"])
        logger.info(f"Verdict: {verdict.classification} ({verdict.score})")
        state["verdict"] = verdict
        return state

    async def archive_node(self, state: WorkflowState) -> WorkflowState:
        state["image_url"] = await self.archiver.run(state["image"])
        return state

    async def persist_node(self, state: WorkflowState) -> WorkflowState:
        state["record"] = await self.store.save(
            content=state.get("content"),
            url=state.get("url"),
            verdict=state["verdict"],
            image_url=state.get("image_url"),
        )
        return state

    # === Routing ===
    @staticmethod
    def decide_search(state: WorkflowState) -> str:
        content = (state.get("content") or "").strip()
        if content and needs_search(content):
            return "search_node"
        return "compose_node"

    @staticmethod
    def decide_archive(state: WorkflowState) -> str:
        if state.get("image") is not None:
            return "archive_node"
        return "persist_node"

    def _build_graph(self):
        workflow = StateGraph(state_schema=WorkflowState)

        workflow.add_node("search_node", self.search_node)
        workflow.add_node("compose_node", self.compose_node)
        workflow.add_node("judge_node", self.judge_node)
        workflow.add_node("parse_node", self.parse_node)
        workflow.add_node("archive_node", self.archive_node)
        workflow.add_node("persist_node", self.persist_node)

        workflow.add_conditional_edges(
            START,
            self.decide_search,
            {"search_node": "search_node", "compose_node": "compose_node"},
        )
        workflow.add_edge("search_node", "compose_node")
        workflow.add_edge("compose_node", "judge_node")
        workflow.add_edge("judge_node", "parse_node")
        workflow.add_conditional_edges(
            "parse_node",
            self.decide_archive,
            {"archive_node": "archive_node", "persist_node": "persist_node"},
        )
        workflow.add_edge("archive_node", "persist_node")
        workflow.add_edge("persist_node", END)

        # No checkpointer: every run is independent.
        return workflow.compile()

    # === Entry point ===
    def check_config(self) -> None:
        if not self.settings.GEMINI_API_KEY:
            logger.error("Google API key not found in environment")
            raise ConfigurationError("Configuração da API não encontrada")
        if not self.settings.supabase_configured:
            logger.error("Supabase credentials not found in environment")
            raise ConfigurationError("Configuração do banco de dados não encontrada")

    async def run(self, request: VerificationRequest) -> VerificationRecord:
        self.check_config()

        logger.info(
            f"Request received: has_content={bool(request.content)} has_url={bool(request.url)} "
            f"has_image={request.image is not None} content_length={len(request.content or '')}"
        )
        if request.is_empty():
            logger.error("No content, URL, or image provided")
            raise InvalidRequest()

        initial_state: WorkflowState = {
            "content": request.content,
            "url": request.url,
            "image": request.image,
            "evidence": None,
            "prompt": "",
            "raw_judgment": "",
            "verdict": None,
            "image_url": None,
            "record": None,
        }
        final_state = await self.graph.ainvoke(initial_state)
        return final_state["record"]
