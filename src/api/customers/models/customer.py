from typing import Optional
from sqlmodel import Field
from src.api.common.models.base import BaseModel, TimestampMixin
from src.api.common.utils.encryption import encrypt_data, decrypt_data


class Customer(BaseModel, TimestampMixin, table=True):
    """
    Customer of a partner, with encrypted contact email
    """
    id: Optional[int] = Field(default=None, primary_key=True)

    partner_uuid: str = Field(index=True)

    # Auth user linked to this customer, when the customer has an account
    user_id: Optional[str] = Field(default=None, index=True)

    first_name: Optional[str] = None
    second_name: Optional[str] = None
    company_name: Optional[str] = None

    encrypted_email: str = Field(default="")

    # Properties to access encrypted data
    @property
    def email(self) -> str:
        """Get decrypted email"""
        return decrypt_data(self.encrypted_email)

    @email.setter
    def email(self, value: str):
        """Set encrypted email"""
        self.encrypted_email = encrypt_data(value)

    @property
    def display_name(self) -> str:
        """Company name when present, otherwise the person's full name"""
        if self.company_name:
            return self.company_name
        return " ".join(part for part in (self.first_name, self.second_name) if part)

    class Config:
        from_attributes = True
