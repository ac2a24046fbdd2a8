from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from quizmint.api.endpoints import router as api_router
from quizmint.core.errors import QuizMintError

app = FastAPI(title="Quiz Mint Signature Server")

app.include_router(api_router)


@app.exception_handler(QuizMintError)
async def handle_quiz_mint_error(request: Request, exc: QuizMintError):
    return JSONResponse(status_code=exc.code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=422, content={"error": "Request body must be {\"address\": string}."})
