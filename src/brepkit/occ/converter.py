"""BREP and STEP serialisation of OCC shape wrappers."""

from __future__ import annotations

import logging
import os
import tempfile
from typing import Optional, Sequence

try:  # pragma: no cover - exercised indirectly in environments with OCC
    from OCC.Core.BRep import BRep_Builder
    from OCC.Core.BRepTools import breptools
    from OCC.Core.IFSelect import IFSelect_RetDone
    from OCC.Core.STEPControl import STEPControl_AsIs, STEPControl_Reader, STEPControl_Writer
    from OCC.Core.TopoDS import TopoDS_Compound
except ImportError:  # pragma: no cover
    BRep_Builder = breptools = None
    IFSelect_RetDone = STEPControl_AsIs = STEPControl_Reader = STEPControl_Writer = None
    TopoDS_Compound = None

from brepkit.config import Settings
from brepkit.occ.helper import require_occ
from brepkit.result import Result
from brepkit.shape import Shape, ShapeConverter

logger = logging.getLogger(__name__)


def _combined(handles):
    if len(handles) == 1:
        return handles[0]
    compound = TopoDS_Compound()
    builder = BRep_Builder()
    builder.MakeCompound(compound)
    for handle in handles:
        builder.Add(compound, handle)
    return compound


def _unwrap(shapes):
    from brepkit.occ.factory import ensure_occ_shape  # circular-safe import
    return ensure_occ_shape(shapes)


def _wrap(handle, settings) -> Result:
    from brepkit.occ.shape import _wrap_shape  # circular-safe import
    if handle is None or handle.IsNull():
        return Result.err("The data does not contain a shape")
    return Result.ok(_wrap_shape(handle, settings))


class OccShapeConverter(ShapeConverter):
    """
    Convert shapes to and from BREP and STEP text.

    Several shapes are written as one compound.  Passing a shape from
    another kernel raises :class:`~brepkit.errors.ForeignShapeError`; read
    and write failures come back as ``Result.err``.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings

    def convert_to_brep(self, shapes: Sequence[Shape]) -> Result[str, str]:
        require_occ()
        handles = _unwrap(shapes)
        if not handles:
            return Result.err("No shapes to convert")
        try:
            return Result.ok(breptools.WriteToString(_combined(handles)))
        except RuntimeError as exc:
            logger.debug("BREP export failed: %s", exc)
            return Result.err(f"Failed to export BREP: {exc}")

    def convert_from_brep(self, text: str) -> Result[Shape, str]:
        require_occ()
        try:
            handle = breptools.ReadFromString(text)
        except RuntimeError as exc:
            logger.debug("BREP import failed: %s", exc)
            return Result.err(f"Failed to import BREP: {exc}")
        return _wrap(handle, self.settings)

    def convert_to_step(self, shapes: Sequence[Shape]) -> Result[str, str]:
        require_occ()
        handles = _unwrap(shapes)
        if not handles:
            return Result.err("No shapes to convert")
        writer = STEPControl_Writer()
        if writer.Transfer(_combined(handles), STEPControl_AsIs) != IFSelect_RetDone:
            return Result.err("Failed to transfer the shapes to STEP")
        tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".step")
        tmp.close()
        try:
            if writer.Write(tmp.name) != IFSelect_RetDone:
                return Result.err("Failed to write STEP data")
            with open(tmp.name, "r", encoding="utf-8") as handle:
                return Result.ok(handle.read())
        finally:
            os.remove(tmp.name)

    def convert_from_step(self, text: str) -> Result[Shape, str]:
        require_occ()
        tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".step", mode="w", encoding="utf-8")
        try:
            tmp.write(text)
            tmp.close()
            reader = STEPControl_Reader()
            if reader.ReadFile(tmp.name) != IFSelect_RetDone:
                return Result.err("Failed to read STEP data")
            if reader.TransferRoots() == 0:
                return Result.err("The STEP data does not contain a shape")
            return _wrap(reader.OneShape(), self.settings)
        finally:
            os.remove(tmp.name)


__all__ = ["OccShapeConverter"]
