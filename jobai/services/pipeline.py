from typing import Optional, Tuple, TypedDict

from langgraph.graph import END, START, StateGraph

from jobai.models.models import AnalysisResult, HeuristicExtraction, ResumeAnalysis
from jobai.services.ai_client import AIAnalysisClient
from jobai.services.assembler import merge
from jobai.services.field_extractor import FieldExtractor
from jobai.utils.logging_config import PerformanceMonitor, get_logger

logger = get_logger(__name__)


class PipelineState(TypedDict, total=False):
    text: str
    file_name: str
    heuristic: HeuristicExtraction
    ai_result: AnalysisResult
    analysis: ResumeAnalysis


def make_nodes(extractor: FieldExtractor, ai_client: AIAnalysisClient):
    def node_heuristics(state: PipelineState):
        return {"heuristic": extractor.extract_basic_info(state["text"])}  # DELTA

    def node_ai_analysis(state: PipelineState):
        result = ai_client.analyze_resume(state["text"], state.get("file_name", ""))
        return {"ai_result": result}  # DELTA

    def node_merge(state: PipelineState):
        return {"analysis": merge(state["heuristic"], state["ai_result"])}

    return node_heuristics, node_ai_analysis, node_merge


def build_graph(extractor: FieldExtractor, ai_client: AIAnalysisClient):
    node_heuristics, node_ai_analysis, node_merge = make_nodes(extractor, ai_client)
    g = StateGraph(PipelineState)
    g.add_node("heuristics", node_heuristics)
    g.add_node("ai_analysis", node_ai_analysis)
    g.add_node("merge", node_merge)
    # heuristics and AI analysis are independent; merge waits for both
    g.add_edge(START, "heuristics")
    g.add_edge(START, "ai_analysis")
    g.add_edge(["heuristics", "ai_analysis"], "merge")
    g.add_edge("merge", END)
    return g.compile()


def run_sequential(extractor: FieldExtractor, ai_client: AIAnalysisClient, text: str, file_name: str = ""):
    node_heuristics, node_ai_analysis, node_merge = make_nodes(extractor, ai_client)
    state: PipelineState = {"text": text, "file_name": file_name}
    heuristic_out = node_heuristics(state)
    ai_out = node_ai_analysis(state)
    merge_out = node_merge({**state, **heuristic_out, **ai_out})
    return {**state, **heuristic_out, **ai_out, **merge_out}


class ResumeAnalysisPipeline:
    """Heuristic extraction and AI analysis of one resume text, merged."""

    def __init__(
        self,
        extractor: Optional[FieldExtractor] = None,
        ai_client: Optional[AIAnalysisClient] = None,
        use_graph: bool = True,
    ):
        self.extractor = extractor or FieldExtractor()
        self.ai_client = ai_client or AIAnalysisClient()
        self.use_graph = use_graph
        self._graph = build_graph(self.extractor, self.ai_client) if use_graph else None

    def run(self, text: str, file_name: str = "") -> Tuple[ResumeAnalysis, AnalysisResult]:
        with PerformanceMonitor(f"Resume analysis pipeline ({file_name or 'resume'})", logger, threshold_ms=30000):
            if self._graph is not None:
                state = self._graph.invoke({"text": text, "file_name": file_name})
            else:
                state = run_sequential(self.extractor, self.ai_client, text, file_name)
        return state["analysis"], state["ai_result"]
