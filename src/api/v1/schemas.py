"""
API Schemas: Pydantic models for request/response validation
"""

from typing import Optional, List, Any, Literal
from pydantic import BaseModel, Field


class AccountSchema(BaseModel):
    """Account schema"""

    id: str
    name: str
    type: Optional[str] = None


class LineItemSchema(BaseModel):
    """Receipt line item schema"""

    name: str
    price: float


class ScanResponse(BaseModel):
    """Response schema for receipt scan endpoint"""

    merchant_guess: Optional[str] = Field(None, description="Merchant or description guess")
    date_guess: Optional[str] = Field(None, description="ISO date found on the receipt, today if none")
    total_amount: Optional[float] = Field(None, description="Guessed receipt total")
    formatted_total: Optional[str] = Field(None, description="Total formatted as Rupiah")
    detected_provider: Optional[str] = Field(None, description="Bank / e-wallet named on the receipt")
    suggested_account: Optional[AccountSchema] = Field(None, description="User account matching the provider")
    line_items: List[LineItemSchema] = Field(default_factory=list)
    confidence: float = Field(..., ge=0.0, le=100.0, description="OCR confidence (0-100)")
    raw_text: str = Field("", description="Recognized text")


class ConfirmReceiptRequest(BaseModel):
    """Request schema for saving a reviewed receipt"""

    user_id: str = Field(..., description="User identifier")
    account_id: str = Field(..., description="Account paying the expense")
    category_id: str = Field(..., description="Expense category")
    amount: float = Field(..., gt=0, description="Confirmed total")
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$", description="Confirmed ISO date")
    merchant: Optional[str] = Field(None, description="Merchant; used as description")
    item: Optional[str] = Field(None, description="Item note")
    image_base64: Optional[str] = Field(None, description="Original receipt image, base64 or data URI")


class ConfirmReceiptResponse(BaseModel):
    """Response schema for saved receipt"""

    success: bool
    transaction_id: Optional[str] = None
    message: str


class ColumnsSchema(BaseModel):
    """Detected column indices"""

    header_row_index: int
    date: Optional[int] = None
    description: Optional[int] = None
    debit: Optional[int] = None
    credit: Optional[int] = None
    amount: Optional[int] = None


class CandidateSchema(BaseModel):
    """Import candidate schema"""

    date: str
    description: str
    amount: float
    formatted_amount: str
    type: Literal["income", "expense"]
    suggested_category: str
    is_duplicate: bool = False
    original_row: List[Any] = Field(default_factory=list)


class StatementPreviewResponse(BaseModel):
    """Response schema for statement preview endpoint"""

    source_file: str
    bank: str
    columns: ColumnsSchema
    total_rows: int
    income_count: int
    expense_count: int
    income_total: float = 0.0
    expense_total: float = 0.0
    income_total_compact: str = Field("0", description="Income total in short form, e.g. \"8jt\"")
    expense_total_compact: str = Field("0", description="Expense total in short form, e.g. \"500rb\"")
    candidates: List[CandidateSchema]


class ImportCandidateInput(BaseModel):
    """Reviewed candidate sent back for import"""

    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    description: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    type: Literal["income", "expense"]
    suggested_category: str = Field("Lainnya")


class ImportRequest(BaseModel):
    """Request schema for batch statement import"""

    user_id: str = Field(..., description="User identifier")
    account_id: str = Field(..., description="Target account")
    candidates: List[ImportCandidateInput] = Field(default_factory=list)


class ImportSummaryResponse(BaseModel):
    """Aggregate result of a batch import"""

    total: int
    imported: int
    skipped: int
    errors: int


class HealthResponse(BaseModel):
    """Health check response"""

    status: str
    service: str
    version: str
    storage_type: str
    database_status: str
