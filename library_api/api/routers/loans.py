from fastapi import APIRouter, Depends, Response, status

from ...crud import loans as crud
from ...schemas.loan import LoanCreate, LoanOut
from ..deps import get_store

router = APIRouter()


@router.get("/", response_model=list[LoanOut])
def list_loans(engine=Depends(get_store)):
    return crud.list_loans(engine)


@router.get("/{loan_id}", response_model=LoanOut)
def get_loan(loan_id: int, engine=Depends(get_store)):
    return crud.get_loan(engine, loan_id)


@router.post("/", response_model=LoanOut, status_code=201)
def create_loan(payload: LoanCreate, engine=Depends(get_store)):
    return crud.create_loan(engine, payload)


@router.put("/{loan_id}/return", status_code=204)
def return_loan(loan_id: int, engine=Depends(get_store)):
    crud.return_loan(engine, loan_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{loan_id}", status_code=204)
def delete_loan(loan_id: int, engine=Depends(get_store)):
    crud.delete_loan(engine, loan_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
