"""
WiX v3 source (.wxs) rendering for a declarative ``Project``.

The output is a single self-contained document that ``candle``/``light``
can compile with the UI and Util extensions:

    Product
      Package / MediaTemplate / MajorUpgrade
      Property ...
      Directory TARGETDIR
        Directory ProgramFiles64Folder
          Directory APPLICATIONFOLDER
            Component (one per file, one per environment entry)
      Feature ... (ComponentRef ...)
      SetProperty / CustomAction / InstallExecuteSequence
      WixVariable WixUILicenseRtf / UIRef
"""

from __future__ import annotations

import re
import uuid
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .environment import EnvironmentVariable
from .file_operations import FileManager
from .model import (
    ControlPanelInfo,
    CustomAction,
    Dir,
    Feature,
    File,
    Project,
    Property,
    SetProperty,
    make_id,
)

WIX_NAMESPACE = "http://schemas.microsoft.com/wix/2006/wi"

PROGRAM_FILES_FOLDERS = {
    "x64": "ProgramFiles64Folder",
    "x86": "ProgramFilesFolder",
}


def stable_guid(namespace: uuid.UUID, name: str) -> str:
    return "{" + str(uuid.uuid5(namespace, name)).upper() + "}"


def yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def source_path(source_root: Path, source: str) -> Path:
    """Sources are declared with either separator; resolve them on the build host."""
    return source_root.joinpath(*[part for part in re.split(r"[\\/]", source) if part])


class _Renderer:
    def __init__(self, project: Project, source_root: Path, check_sources: bool) -> None:
        self.project = project
        self.source_root = source_root
        self.check_sources = check_sources
        self.features: List[Feature] = []
        self.feature_components: Dict[int, List[str]] = {}
        self.default_feature: Optional[Feature] = None

    # ---- features ----------------------------------------------------------

    def _register(self, feature: Optional[Feature], component_id: str) -> None:
        if feature is None:
            if self.default_feature is None:
                self.default_feature = Feature(self.project.name, allow_change=False)
            feature = self.default_feature
        if id(feature) not in self.feature_components:
            self.features.append(feature)
            self.feature_components[id(feature)] = []
        self.feature_components[id(feature)].append(component_id)

    # ---- tree --------------------------------------------------------------

    def _file(self, parent: ET.Element, dir_id: str, entry: File, feature: Optional[Feature]) -> None:
        path = source_path(self.source_root, entry.source)
        if self.check_sources:
            path = FileManager.require_file(path)
        file_id = make_id(f"{dir_id}.{entry.install_name}")
        component_id = make_id(f"Component.{file_id}")
        component = ET.SubElement(parent, "Component", Id=component_id,
                                  Guid=stable_guid(self.project.guid, file_id))
        ET.SubElement(component, "File", Id=file_id, Name=entry.install_name,
                      Source=str(path), KeyPath="yes")
        self._register(entry.feature or feature, component_id)

    def _dir(self, parent: ET.Element, entry: Dir, parent_id: str, feature: Optional[Feature]) -> ET.Element:
        dir_id = entry.id or make_id(f"{parent_id}.{entry.name}")
        element = ET.SubElement(parent, "Directory", Id=dir_id, Name=entry.name)
        feature = entry.feature or feature
        for child in entry.entries:
            if isinstance(child, Dir):
                self._dir(element, child, dir_id, feature)
            elif isinstance(child, File):
                self._file(element, dir_id, child, feature)
            else:
                raise TypeError(f"Unsupported directory entry: {child!r}")
        return element

    def _environment(self, parent: ET.Element, variables: List[EnvironmentVariable]) -> None:
        for index, variable in enumerate(variables, start=1):
            scope = "System" if variable.system else "User"
            env_id = make_id(f"Env.{variable.name}.{scope}.{index}")
            component_id = make_id(f"Component.{env_id}")
            component = ET.SubElement(parent, "Component", Id=component_id,
                                      Guid=stable_guid(self.project.guid, env_id), KeyPath="yes")
            if variable.condition:
                ET.SubElement(component, "Condition").text = variable.condition
            ET.SubElement(component, "Environment",
                          Id=env_id,
                          Name=variable.name,
                          Value=variable.value,
                          Permanent=yes_no(variable.permanent),
                          Part=variable.part.value,
                          Action=variable.action.value,
                          System=yes_no(variable.system))
            self._register(variable.feature, component_id)

    # ---- document ----------------------------------------------------------

    def _product(self, wix: ET.Element) -> ET.Element:
        project = self.project
        product = ET.SubElement(wix, "Product",
                                Id=project.product_code,
                                Name=project.name,
                                Language=str(project.language),
                                Version=project.msi_version,
                                Manufacturer=project.control_panel.manufacturer or project.name,
                                UpgradeCode=project.upgrade_code)
        package = {
            "InstallerVersion": "200",
            "Compressed": "yes",
            "Platform": project.platform,
        }
        package.update(project.package_attributes)
        ET.SubElement(product, "Package", package)
        ET.SubElement(product, "MediaTemplate", EmbedCab="yes")
        if project.major_upgrade is not None:
            upgrade = project.major_upgrade
            ET.SubElement(product, "MajorUpgrade",
                          Schedule=upgrade.schedule,
                          AllowSameVersionUpgrades=yes_no(upgrade.allow_same_version_upgrades),
                          DowngradeErrorMessage=upgrade.downgrade_error_message)
        return product

    def _control_panel(self, product: ET.Element, info: ControlPanelInfo) -> None:
        if info.url_info_about:
            ET.SubElement(product, "Property", Id="ARPURLINFOABOUT", Value=info.url_info_about)

    def render(self) -> ET.Element:
        project = self.project
        wix = ET.Element("Wix", xmlns=WIX_NAMESPACE)
        product = self._product(wix)
        self._control_panel(product, project.control_panel)

        dirs: List[Dir] = []
        variables: List[EnvironmentVariable] = []
        set_properties: List[SetProperty] = []
        actions: List[CustomAction] = []
        for entry in project.entries:
            if isinstance(entry, Property):
                ET.SubElement(product, "Property", Id=entry.name, Value=entry.value)
            elif isinstance(entry, Dir):
                dirs.append(entry)
            elif isinstance(entry, EnvironmentVariable):
                variables.append(entry)
            elif isinstance(entry, SetProperty):
                set_properties.append(entry)
            elif isinstance(entry, CustomAction):
                actions.append(entry)
            else:
                raise TypeError(f"Unsupported project entry: {entry!r}")

        target = ET.SubElement(product, "Directory", Id="TARGETDIR", Name="SourceDir")
        program_files = ET.SubElement(target, "Directory",
                                      Id=PROGRAM_FILES_FOLDERS.get(project.platform, "ProgramFilesFolder"))
        install_dirs: List[Tuple[Dir, ET.Element]] = []
        for entry in dirs:
            install_dirs.append((entry, self._dir(program_files, entry, "INSTALLDIR", None)))
        if variables:
            if not install_dirs:
                raise ValueError("Environment variables need an installation directory")
            self._environment(install_dirs[0][1], variables)

        for feature in self.features:
            attributes = {
                "Id": feature.id,
                "Title": feature.name,
                "Level": str(feature.level),
                "Absent": "allow" if feature.allow_change else "disallow",
            }
            if feature.description:
                attributes["Description"] = feature.description
            attributes.update(feature.attributes)
            element = ET.SubElement(product, "Feature", attributes)
            for component_id in self.feature_components[id(feature)]:
                ET.SubElement(element, "ComponentRef", Id=component_id)

        for entry in set_properties:
            element = ET.SubElement(product, "SetProperty",
                                    Id=entry.name,
                                    Action=entry.action_id,
                                    Value=entry.value,
                                    After=entry.after,
                                    Sequence=entry.sequence)
            if entry.condition:
                element.text = entry.condition

        if actions:
            for action in actions:
                ET.SubElement(product, "CustomAction",
                              Id=action.id,
                              BinaryKey=action.binary_key,
                              DllEntry=action.dll_entry,
                              Execute=action.execute,
                              Return=action.return_)
            sequence = ET.SubElement(product, "InstallExecuteSequence")
            for action in actions:
                ET.SubElement(sequence, "Custom", Action=action.id, After=action.after).text = action.condition

        if project.license_file:
            license_path = source_path(self.source_root, project.license_file)
            if self.check_sources:
                license_path = FileManager.require_file(license_path)
            ET.SubElement(product, "WixVariable", Id="WixUILicenseRtf", Value=str(license_path))
        if project.ui:
            ET.SubElement(product, "UIRef", Id=project.ui)
        return wix


def render(project: Project, source_root: Path, check_sources: bool = True) -> str:
    """Render ``project`` as WiX source text, with source paths resolved against ``source_root``."""
    wix = _Renderer(project, Path(source_root), check_sources).render()
    ET.indent(wix, space="  ")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(wix, encoding="unicode") + "\n"
