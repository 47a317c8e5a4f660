"""
Data API model: Trip

Fields written by the booking portal:
    - companyId (ID)
    - pickupDate (datetime)
    - flightNumber (string)   → flight number or job number, "N/A" if neither
    - pickupLocation (string)
    - dropoffLocation (string)
    - numberOfPassengers (int)
    - status (enum)           → always "Unassigned" on creation
    - customerId (ID, optional)
    - notes (string, optional)
"""

from typing import Any, Dict, Optional

from db.base import GraphQLRepo, strip_none

TRIP_STATUS_UNASSIGNED = "Unassigned"

CREATE_TRIP_MUTATION = """
mutation CreateTrip($input: CreateTripInput!) {
  createTrip(input: $input) {
    id
  }
}
"""


class TripDB(GraphQLRepo):
    def create_trip(
        self,
        company_id: str,
        pickup_date: str,
        flight_number: str,
        pickup_location: str,
        dropoff_location: str,
        number_of_passengers: int = 1,
        customer_id: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create an unassigned trip and return the created record."""
        item = strip_none({
            "companyId": company_id,
            "pickupDate": pickup_date,
            "flightNumber": flight_number,
            "pickupLocation": pickup_location,
            "dropoffLocation": dropoff_location,
            "numberOfPassengers": number_of_passengers,
            "status": TRIP_STATUS_UNASSIGNED,
            "customerId": customer_id,
            "notes": notes or None,
        })
        data = self.client.execute(CREATE_TRIP_MUTATION, {"input": item})
        return data.get("createTrip") or {}
