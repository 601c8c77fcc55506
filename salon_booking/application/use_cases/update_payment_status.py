import logging

from salon_booking.application.dtos.reservation_dto import UpdatePaymentStatusInput
from salon_booking.application.interfaces.reservation_repo import ReservationRepo
from salon_booking.domain.entities.reservation import Reservation
from salon_booking.domain.errors import RepositoryError
from salon_booking.domain.result import Err, Result

logger = logging.getLogger(__name__)


class UpdatePaymentStatusUseCase:
    """
    Marca una reserva como pagada o pendiente de pago.

    El flag es independiente del ciclo de vida, por eso no hay guardia de
    estado: una reserva cancelada o completada también puede conciliarse.
    """

    def __init__(self, reservation_repo: ReservationRepo) -> None:
        self._reservation_repo = reservation_repo

    async def execute(self, request: UpdatePaymentStatusInput) -> Result[Reservation, RepositoryError]:
        result = await self._reservation_repo.update_payment_status(
            request.id, request.is_paid, request.updated_by
        )
        if isinstance(result, Err):
            logger.warning(
                "Payment status update rejected",
                extra={"reservation_id": request.id, "code": result.error.code},
            )
            return result

        logger.info(
            "Payment status updated",
            extra={"reservation_id": request.id, "is_paid": request.is_paid},
        )
        return result
