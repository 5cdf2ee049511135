"""
FastAPI endpoints for the proxy auction service.

Provides REST API for item creation, bid submission and winner resolution.
Amounts are integer cents throughout.
"""

import logging
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError

from auction.errors import (
    AuctionError,
    InvalidIdentifier,
    InvalidRequestBody,
    ItemNotFound,
    NoBidsError,
)
from observability.metrics import metrics_collector, setup_metrics_endpoint_fastapi

from .config import ServiceConfig
from .service import AuctionService

logger = logging.getLogger(__name__)

# Client-facing status and message for each core failure
ERROR_RESPONSES = {
    InvalidIdentifier: (400, "Invalid Item ID"),
    InvalidRequestBody: (400, "Invalid request body"),
    ItemNotFound: (404, "Item not found"),
    NoBidsError: (404, "No winner found"),
}


# Request/Response models


class ItemRequest(BaseModel):
    """Request to create an item"""

    name: StrictStr = Field(..., description="Display name of the item")


class ItemResponse(BaseModel):
    """Item record"""

    id: int
    name: str


class BidRequest(BaseModel):
    """Request to submit a proxy bid"""

    bidder_name: StrictStr = Field(..., description="Bidder label")
    initial_bid: StrictInt = Field(..., description="Opening bid in cents")
    max_bid: StrictInt = Field(..., description="Maximum bid in cents")
    bid_increment: StrictInt = Field(..., description="Raise step in cents")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "bidder_name": "Pat",
                "initial_bid": 5500,
                "max_bid": 8500,
                "bid_increment": 500,
            }
        }
    )


class BidResponse(BaseModel):
    """Stored proxy bid"""

    bidder_name: str
    initial_bid: int
    max_bid: int
    bid_increment: int
    current_bid: int
    item_id: int


def create_app(
    service: Optional[AuctionService] = None, config: Optional[ServiceConfig] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        service: Auction service (fresh in-memory one if None)
        config: Service configuration (defaults if None)

    Returns:
        Configured FastAPI app
    """
    config = config or ServiceConfig()
    service = service or AuctionService()

    app = FastAPI(title="Proxy Auction API", version="1.0.0")
    app.state.service = service
    app.state.config = config

    @app.exception_handler(AuctionError)
    async def auction_error_handler(request: Request, exc: AuctionError):
        status_code, detail = ERROR_RESPONSES.get(type(exc), (400, "Bad request"))
        metrics_collector.record_request_error(type(exc).__name__)
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
        return JSONResponse(status_code=status_code, content={"detail": detail})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        metrics_collector.record_request_error("InvalidRequestBody")
        logger.warning(f"{request.method} {request.url.path} invalid body: {exc.errors()}")
        return JSONResponse(status_code=400, content={"detail": "Invalid request body"})

    # API Endpoints

    @app.post("/items", response_model=ItemResponse)
    def create_item(request: ItemRequest):
        """Create an auction item with the next sequential id."""
        item = service.create_item(request.name)
        return ItemResponse(**item.to_dict())

    @app.get("/items", response_model=List[ItemResponse])
    def list_items():
        """List all items."""
        return [ItemResponse(**item.to_dict()) for item in service.list_items()]

    @app.post(
        "/items/{item_id}/bids",
        response_model=BidResponse,
        openapi_extra={
            "requestBody": {
                "content": {"application/json": {"schema": BidRequest.model_json_schema()}},
                "required": True,
            }
        },
    )
    async def submit_bid(item_id: str, request: Request):
        """
        Submit a proxy bid for an item.

        The item id is checked before the body is read: bad id 400, unknown
        item 404, then bad body 400. The bid is stored with current_bid equal
        to initial_bid; no resolution runs until the winner is requested.
        """
        item = service.get_item(item_id)

        try:
            body = BidRequest.model_validate_json(await request.body())
        except ValidationError as e:
            raise InvalidRequestBody(f"Invalid bid body: {e.errors()}") from None

        bid = await run_in_threadpool(
            service.submit_bid,
            item.id,
            bidder=body.bidder_name,
            initial_bid=body.initial_bid,
            max_bid=body.max_bid,
            increment=body.bid_increment,
        )
        return BidResponse(**bid.to_dict())

    @app.get("/items/{item_id}/bids", response_model=List[BidResponse])
    def list_bids(item_id: str):
        """List an item's bids as left by the last resolution."""
        return [BidResponse(**bid.to_dict()) for bid in service.list_bids(item_id)]

    @app.get("/items/{item_id}/winner", response_model=BidResponse)
    def get_winner(item_id: str):
        """Resolve and return the winning bid; current_bid is the clearing price."""
        return BidResponse(**service.get_winner(item_id).to_dict())

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": config.service_name}

    setup_metrics_endpoint_fastapi(app)

    return app


app = create_app()


def main():
    """Run the API server with settings from the environment."""
    import uvicorn

    config = ServiceConfig.from_env()
    config.configure_logging()

    logger.info(f"Server is running on {config.host}:{config.port}")
    # uvicorn handles SIGINT/SIGTERM with a graceful shutdown
    uvicorn.run(
        create_app(config=config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
    logger.info("Server exiting gracefully")


if __name__ == "__main__":
    main()
