from fastapi import APIRouter, Depends, HTTPException

from studiodesk.api.v1.schemas import LineItemSchema, TransactionRequestSchema, TransactionSchema
from studiodesk.application.use_cases.transactions import TransactionUseCase
from studiodesk.domain.entities.transaction import LineItem, Transaction
from studiodesk.wiring.dependencies import get_transaction_use_case

router = APIRouter()


def _to_schema(transaction: Transaction) -> TransactionSchema:
    return TransactionSchema(
        id=transaction.id,
        items=[
            LineItemSchema(
                product_id=i.product_id,
                product_name=i.product_name,
                quantity=i.quantity,
                unit_price=i.unit_price,
                category=i.category,
            )
            for i in transaction.items
        ],
        subtotal=round(transaction.subtotal, 2),
        discount=round(transaction.discount, 2),
        tax=round(transaction.tax, 2),
        total=round(transaction.total, 2),
        seller_id=transaction.seller_id,
        seller_name=transaction.seller_name,
        timestamp=transaction.timestamp,
        location=transaction.location,
        person_id=transaction.person_id,
        person_name=transaction.person_name,
        promo_code=transaction.promo_code,
    )


@router.post("/transactions", response_model=TransactionSchema, status_code=201)
def record_transaction(
    req: TransactionRequestSchema,
    uc: TransactionUseCase = Depends(get_transaction_use_case),
):
    try:
        transaction = uc.record_transaction(
            items=[LineItem(**i.model_dump()) for i in req.items],
            seller_id=req.seller_id,
            location=req.location,
            discount=req.discount,
            tax=req.tax,
            person_id=req.person_id,
            person_name=req.person_name,
            promo_code=req.promo_code,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _to_schema(transaction)


@router.get("/transactions", response_model=list[TransactionSchema])
def list_transactions(
    person_id: str | None = None,
    uc: TransactionUseCase = Depends(get_transaction_use_case),
):
    return [_to_schema(t) for t in uc.list_transactions(person_id)]
