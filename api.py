from __future__ import annotations

import os
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from jsanalyzer.config import load_config
from jsanalyzer.errors import ConfigError, ProjectAccessError
from jsanalyzer.model import AnalysisReport
from jsanalyzer.pipeline import analyze_project


app = FastAPI(title="JS/TS Structure Analyzer")


class AnalyzeRequest(BaseModel):
    root_path: str
    large_function_threshold: Optional[int] = None
    top_imports: Optional[int] = None
    include_structure: bool = False


@app.post("/analyze", response_model=AnalysisReport)
def analyze(req: AnalyzeRequest) -> AnalysisReport:
    root = os.path.abspath(req.root_path)
    if not os.path.isdir(root):
        raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")

    try:
        config = load_config(
            root=root,
            large_function_threshold=req.large_function_threshold,
            top_imports=req.top_imports,
        )
        return analyze_project(root, config, include_structure=req.include_structure)
    except (ProjectAccessError, ConfigError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


def create_app() -> FastAPI:
    return app
