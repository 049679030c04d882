"""Join-link QR code rendering. Pure function of the URL; touches no auction state."""
import segno

from config.settings import settings


def render_qr_data_uri(
    url: str, width: int = settings.QR_WIDTH, margin: int = settings.QR_MARGIN
) -> str:
    """PNG data URI of a QR code for url, scaled to roughly width pixels."""
    qr = segno.make_qr(url)
    modules, _ = qr.symbol_size(scale=1, border=margin)
    return qr.png_data_uri(scale=max(1, width // modules), border=margin)
