"""Single-level Daubechies wavelet filter bank.

One call to :func:`transform` splits a sequence into approximation and
detail coefficients at half the input rate. The detector iterates it on the
approximation output to build a multi-resolution pyramid.
"""

from __future__ import annotations

from enum import IntEnum

import numpy as np

from wavebpm.errors import InvalidInputError


class Daubechies(IntEnum):
    """Daubechies wavelet families, ordered by filter support length."""
    DB1 = 1
    DB2 = 2
    DB3 = 3
    DB4 = 4
    DB5 = 5

    @property
    def coefficients(self) -> np.ndarray:
        return np.array(_COEFFICIENTS[self], dtype=np.float64)

    @property
    def filter_length(self) -> int:
        return len(_COEFFICIENTS[self])


_COEFFICIENTS: dict[Daubechies, tuple[float, ...]] = {
    Daubechies.DB1: (
        7.071067811865475244008443621048490392848359376884740365883398e-01,
        7.071067811865475244008443621048490392848359376884740365883398e-01,
    ),
    Daubechies.DB2: (
        4.829629131445341433748715998644486838169524195042022752011715e-01,
        8.365163037378079055752937809168732034593703883484392934953414e-01,
        2.241438680420133810259727622404003554678835181842717613871683e-01,
        -1.294095225512603811744494188120241641745344506599652569070016e-01,
    ),
    Daubechies.DB3: (
        3.326705529500826159985115891390056300129233992450683597084705e-01,
        8.068915093110925764944936040887134905192973949948236181650920e-01,
        4.598775021184915700951519421476167208081101774314923066433867e-01,
        -1.350110200102545886963899066993744805622198452237811919756862e-01,
        -8.544127388202666169281916918177331153619763898808662976351748e-02,
        3.522629188570953660274066471551002932775838791743161039893406e-02,
    ),
    Daubechies.DB4: (
        2.303778133088965008632911830440708500016152482483092977910968e-01,
        7.148465705529156470899219552739926037076084010993081758450110e-01,
        6.308807679298589078817163383006152202032229226771951174057473e-01,
        -2.798376941685985421141374718007538541198732022449175284003358e-02,
        -1.870348117190930840795706727890814195845441743745800912057770e-01,
        3.084138183556076362721936253495905017031482172003403341821219e-02,
        3.288301166688519973540751354924438866454194113754971259727278e-02,
        -1.059740178506903210488320852402722918109996490637641983484974e-02,
    ),
    Daubechies.DB5: (
        1.601023979741929144807237480204207336505441246250578327725699e-01,
        6.038292697971896705401193065250621075074221631016986987969283e-01,
        7.243085284377729277280712441022186407687562182320073725767335e-01,
        1.384281459013207315053971463390246973141057911739561022694652e-01,
        -2.422948870663820318625713794746163619914908080626185983913726e-01,
        -3.224486958463837464847975506213492831356498416379847225434268e-02,
        7.757149384004571352313048938860181980623099452012527983210146e-02,
        -6.241490212798274274190519112920192970763557165687607323417435e-03,
        -1.258075199908199946850973993177579294920459162609785020169232e-02,
        3.335725285473771277998183415817355747636524742305315099706428e-03,
    ),
}


def decomposition_filters(wavelet: Daubechies) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(canonical, mirrored)`` analysis filters for *wavelet*.

    The mirrored filter is the canonical vector reversed, with every
    odd-indexed element of the reversed vector negated.
    """
    canonical = Daubechies(wavelet).coefficients
    mirrored = canonical[::-1].copy()
    mirrored[1::2] *= -1
    return canonical, mirrored


def padding_length(wavelet: Daubechies) -> int:
    """Number of wrap-around samples appended to the input tail."""
    return Daubechies(wavelet).filter_length // 2


def output_length(n: int, wavelet: Daubechies) -> int:
    """Length of each output channel for an input of *n* samples."""
    return (n + padding_length(wavelet) + 1) // 2


def minimum_input_length(levels: int, wavelet: Daubechies) -> int:
    """Shortest input that keeps every level at least one filter long."""
    filter_length = Daubechies(wavelet).filter_length
    pad = padding_length(wavelet)
    required = filter_length
    # Walk back from the deepest level: ceil((n + pad) / 2) >= m  <=>  n >= 2m - 1 - pad
    for _ in range(levels - 1):
        required = max(filter_length, 2 * required - 1 - pad)
    return required


def _correlate_decimate(padded: np.ndarray, taps: np.ndarray) -> np.ndarray:
    # Sliding dot product over the padded input, zero beyond its tail,
    # then keep every second output starting at index 0.
    extended = np.concatenate([padded, np.zeros(len(taps) - 1)])
    return np.correlate(extended, taps, mode="valid")[::2]


def transform(data: np.ndarray, wavelet: Daubechies = Daubechies.DB2) -> tuple[np.ndarray, np.ndarray]:
    """Run one level of the two-channel filter bank.

    Parameters
    ----------
    data:
        1-D input sequence.
    wavelet:
        Daubechies family providing the filter pair.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        ``(approximation, detail)``, each of length
        ``ceil((len(data) + pad) / 2)``.
    """
    data = np.asarray(data, dtype=np.float64)
    canonical, mirrored = decomposition_filters(wavelet)
    if data.ndim != 1:
        raise InvalidInputError(f"Expected a 1-D sequence, got shape {data.shape}")
    if len(data) < len(canonical):
        raise InvalidInputError(
            f"Input of {len(data)} samples is shorter than the "
            f"{Daubechies(wavelet).name.lower()} filter ({len(canonical)} taps)"
        )

    pad = len(canonical) // 2
    padded = np.concatenate([data, data[:pad]])

    approximation = _correlate_decimate(padded, canonical)
    detail = _correlate_decimate(padded, mirrored)
    return approximation, detail
