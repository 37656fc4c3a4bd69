"""
Address element shared by incoming and outgoing documents.

Imported from <Address> nodes of purchase orders and exported into outgoing
documents such as shipment notices.
"""

from typing import ClassVar, Optional, Tuple

from lxml import etree
from pydantic import BaseModel, ConfigDict, Field, field_validator

from edi_exchange.exceptions import InvalidElementError, RequiredFieldError
from edi_exchange.validators import validate_type_code


class Address(BaseModel):
    """
    Party address (bill-to, ship-to, ship-from, buying party).

    Attributes:
        type_code: Address role ('BT', 'ST', 'SF', 'BY')
        location_qualifier: Qualifier for location_number (e.g., '92' = buyer assigned)
        location_number: Store / DC number assigned by the qualifier
        name, street1, street2, city, state, postal_code, country: Postal address
        is_location_only: The address identifies a store location only; name
            and postal fields become optional, location fields required

    Example:
        >>> address = Address(type_code='ST', name='DC 4', street1='1 Main St',
        ...                   city='Minneapolis', state='MN', postal_code='55401')
        >>> node = address.to_xml(etree.Element('Header'))
        >>> node.findtext('City')
        'Minneapolis'
    """

    TYPE_BILL_TO: ClassVar[str] = 'BT'
    TYPE_SHIP_TO: ClassVar[str] = 'ST'
    TYPE_SHIP_FROM: ClassVar[str] = 'SF'
    TYPE_BUYING_PARTY: ClassVar[str] = 'BY'
    VALID_TYPES: ClassVar[Tuple[str, ...]] = ('BT', 'SF', 'ST', 'BY')

    LOCATION_QUALIFIER_BUYER: ClassVar[str] = '92'

    type_code: str = ''
    location_qualifier: str = ''
    location_number: str = ''
    name: str = ''
    street1: str = ''
    street2: str = ''
    city: str = ''
    state: str = ''
    postal_code: str = ''
    country: str = Field(default='USA')
    is_location_only: bool = False

    model_config = ConfigDict(validate_assignment=True)

    _normalize_type_code = field_validator('type_code', mode='before')(validate_type_code)

    @classmethod
    def from_xml(cls, root: etree._Element) -> 'Address':
        """
        Populate an address from an <Address> node.

        Raises:
            InvalidElementError: If root is not an <Address> element
        """
        if root.tag != 'Address':
            raise InvalidElementError('Address root is invalid.')
        data = dict(
            type_code=root.findtext('AddressTypeCode', default=''),
            location_qualifier=root.findtext('LocationCodeQualifier', default=''),
            location_number=root.findtext('AddressLocationNumber', default=''),
            name=root.findtext('AddressName', default=''),
            street1=root.findtext('Address1', default=''),
            street2=root.findtext('Address2', default=''),
            city=root.findtext('City', default=''),
            state=root.findtext('State', default=''),
            postal_code=root.findtext('PostalCode', default=''),
        )
        if root.find('Country') is not None:
            data['country'] = root.findtext('Country', default='')
        return cls(**data)

    def to_xml(self, parent: etree._Element) -> etree._Element:
        """
        Export this address as a new <Address> child of parent.

        The node is only attached once every required field is present, so
        a failed export leaves parent unchanged.

        Returns:
            The appended <Address> element

        Raises:
            InvalidElementError: If type_code is not a known address type
            RequiredFieldError: If a required field is empty
        """
        if self.type_code not in self.VALID_TYPES:
            raise InvalidElementError('Invalid type code.')

        location_only = self.is_location_only
        root = etree.Element('Address')
        self._add_child(root, 'AddressTypeCode', self.type_code, True)
        self._add_child(root, 'LocationCodeQualifier', self.location_qualifier, location_only)
        self._add_child(root, 'AddressLocationNumber', self.location_number, location_only)
        self._add_child(root, 'AddressName', self.name, not location_only)
        self._add_child(root, 'Address1', self.street1, not location_only)
        self._add_child(root, 'Address2', self.street2, False)
        self._add_child(root, 'City', self.city, not location_only)
        self._add_child(root, 'State', self.state, not location_only)
        self._add_child(root, 'PostalCode', self.postal_code, not location_only)
        self._add_child(root, 'Country', self.country, False)
        parent.append(root)
        return root

    @staticmethod
    def _add_child(parent: etree._Element, name: str, value: Optional[str], required: bool) -> None:
        if required and not value:
            raise RequiredFieldError(f'Element "{name}" is required in an address.')
        if value:
            etree.SubElement(parent, name).text = value
