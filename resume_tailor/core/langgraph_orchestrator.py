import logging
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple, TypedDict

from langgraph.graph import END, StateGraph

from resume_tailor.agents import JobAnalyzerAgent, QualityValidatorAgent, ResumeOptimizerAgent
from resume_tailor.errors import PipelineError, ResumeTailorError, StageError
from resume_tailor.models import (
    JobAnalysis,
    OptimizationStrategy,
    PipelineInput,
    ProgressCallback,
    ResumeRecord,
    SchemaKind,
)
from .gemini_client import GeminiClient
from .progress import STAGE_WINDOWS, scoped_progress
from .response_extractor import extract
from .validation import describe_problems


class PipelineState(Enum):
    """Pipeline execution states."""
    IDLE = "idle"
    ANALYZING = "analyzing"
    STRATEGIZING = "strategizing"
    APPLYING = "applying"
    VALIDATING = "validating"
    DONE = "done"
    FAILED = "failed"


class GraphState(TypedDict):
    """
    Defines the state that flows through the LangGraph.
    Each key represents a piece of data managed by the graph for one run.
    """
    pipeline_input: PipelineInput
    api_key: str
    on_progress: ProgressCallback
    status: PipelineState
    job_analysis: JobAnalysis
    strategy: OptimizationStrategy
    optimized_resume: ResumeRecord
    final_resume: ResumeRecord
    stage_timings: Dict[str, float]


class LangGraphOrchestrator:
    """
    Orchestrates the agentic resume customization using a stateful graph (LangGraph).

    The graph is strictly linear: analyze -> strategize -> apply -> validate ->
    finalize. Each node runs one stage agent with a progress callback scoped to
    the stage's window of the global progress bar. A failing stage raises a
    PipelineError naming the stage, which aborts the rest of the graph; the
    orchestrator never substitutes a record of its own.

    Everything that belongs to a run lives in the graph state, so one
    orchestrator can serve overlapping runs.
    """

    def __init__(self, gemini_client: Optional[GeminiClient] = None):
        self.gemini_client = gemini_client or GeminiClient()
        self.analyzer = JobAnalyzerAgent()
        self.optimizer = ResumeOptimizerAgent()
        self.validator = QualityValidatorAgent()
        self.workflow = self._build_graph()

    def call_model(self, api_key: str, prompt: str, schema_kind: SchemaKind) -> Dict[str, Any]:
        """One model round-trip followed by extraction of a `schema_kind` record."""
        response = self.gemini_client.call(api_key, prompt)
        return extract(response, schema_kind)

    def _run_stage(self, name: str, status: PipelineState, state: GraphState, action) -> Tuple[Any, Dict[str, float]]:
        logging.info(f"Node: {name} ({status.value})")
        start_time = datetime.now()
        progress = scoped_progress(state["on_progress"], STAGE_WINDOWS[name])
        try:
            result = action(progress)
        except StageError as e:
            logging.error(f"Pipeline stage '{name}' failed: {e}")
            raise PipelineError(name, e) from e
        execution_time = (datetime.now() - start_time).total_seconds() * 1000
        logging.info(f"Stage '{name}' finished in {execution_time:.0f} ms")
        return result, {**state["stage_timings"], name: execution_time}

    def _build_graph(self):
        """
        Constructs the computational graph defining the stage sequence.
        """

        def analyze_job(state: GraphState) -> Dict:
            pipeline_input = state["pipeline_input"]
            state["on_progress"](5, "Analyzing job requirements...")
            job_analysis, timings = self._run_stage(
                "analyze", PipelineState.ANALYZING, state,
                lambda progress: self.analyzer.run(
                    pipeline_input.job_description,
                    pipeline_input.industry_type,
                    state["api_key"],
                    self.call_model,
                    progress,
                ),
            )
            return {"job_analysis": job_analysis, "status": PipelineState.STRATEGIZING, "stage_timings": timings}

        def create_strategy(state: GraphState) -> Dict:
            state["on_progress"](20, "Creating optimization strategy...")
            strategy, timings = self._run_stage(
                "strategize", PipelineState.STRATEGIZING, state,
                lambda progress: self.optimizer.create_strategy(
                    state["pipeline_input"].resume,
                    state["job_analysis"],
                    state["api_key"],
                    self.call_model,
                    progress,
                ),
            )
            return {"strategy": strategy, "status": PipelineState.APPLYING, "stage_timings": timings}

        def apply_optimizations(state: GraphState) -> Dict:
            state["on_progress"](40, "Applying resume optimizations...")
            optimized_resume, timings = self._run_stage(
                "apply", PipelineState.APPLYING, state,
                lambda progress: self.optimizer.apply_optimizations(
                    state["pipeline_input"].resume,
                    state["strategy"],
                    state["api_key"],
                    self.call_model,
                    progress,
                ),
            )
            return {"optimized_resume": optimized_resume, "status": PipelineState.VALIDATING, "stage_timings": timings}

        def validate_and_refine(state: GraphState) -> Dict:
            state["on_progress"](70, "Validating and refining results...")
            final_resume, timings = self._run_stage(
                "validate", PipelineState.VALIDATING, state,
                lambda progress: self.validator.run(
                    state["optimized_resume"],
                    state["job_analysis"],
                    state["strategy"],
                    state["api_key"],
                    self.call_model,
                    progress,
                ),
            )
            return {"final_resume": final_resume, "stage_timings": timings}

        def finalize(state: GraphState) -> Dict:
            state["on_progress"](90, "Finalizing customized resume...")
            problems = describe_problems(state.get("final_resume"), SchemaKind.RESUME)
            if problems:
                cause = ResumeTailorError(f"Final resume validation failed: {'; '.join(problems)}")
                logging.error(str(cause))
                raise PipelineError("finalize", cause)
            state["on_progress"](100, "Resume customization complete!")
            return {"status": PipelineState.DONE}

        graph_builder = StateGraph(GraphState)
        graph_builder.add_node("analyze_job", analyze_job)
        graph_builder.add_node("create_strategy", create_strategy)
        graph_builder.add_node("apply_optimizations", apply_optimizations)
        graph_builder.add_node("validate_and_refine", validate_and_refine)
        graph_builder.add_node("finalize", finalize)

        graph_builder.set_entry_point("analyze_job")
        graph_builder.add_edge("analyze_job", "create_strategy")
        graph_builder.add_edge("create_strategy", "apply_optimizations")
        graph_builder.add_edge("apply_optimizations", "validate_and_refine")
        graph_builder.add_edge("validate_and_refine", "finalize")
        graph_builder.add_edge("finalize", END)

        logging.info("LangGraph workflow compiled.")
        return graph_builder.compile()

    def run(self, pipeline_input: PipelineInput, api_key: str, on_progress: ProgressCallback) -> ResumeRecord:
        """
        Executes the full customization pipeline.

        Args:
            pipeline_input: The original resume, job description and industry type.
            api_key: The Gemini API key, used read-only by every stage.
            on_progress: Called synchronously with (percentage, message).

        Returns:
            The refined resume record. It has passed the structural check.

        Raises:
            PipelineError: `stage` names the failed stage ("analyze", "strategize",
                "apply", "validate" or "finalize"), `cause` holds the stage error.
        """
        initial_state = {
            "pipeline_input": pipeline_input,
            "api_key": api_key,
            "on_progress": on_progress,
            "status": PipelineState.ANALYZING,
            "job_analysis": {},
            "strategy": {},
            "optimized_resume": {},
            "final_resume": {},
            "stage_timings": {},
        }
        logging.info("Starting agentic resume customization...")
        try:
            final_state = self.workflow.invoke(initial_state)
        except PipelineError as e:
            logging.error(f"Workflow {PipelineState.FAILED.value} at stage '{e.stage}': {e.cause}")
            raise

        total_ms = sum(final_state["stage_timings"].values())
        logging.info(f"Workflow finished ({final_state['status'].value}) in {total_ms:.0f} ms.")
        return final_state["final_resume"]
