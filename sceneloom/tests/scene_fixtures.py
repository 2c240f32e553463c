"""Unity scene text shared by the scene and pipeline tests."""

PLAYER_GUID = "aaa111aaa111aaa111aaa111aaa111aa"
UNUSED_GUID = "bbb222bbb222bbb222bbb222bbb222bb"

PLAYER_SCENE = """%YAML 1.1
%TAG !u! tag:unity3d.com,2011:
--- !u!1 &100
GameObject:
  m_ObjectHideFlags: 0
  serializedVersion: 6
  m_Component:
  - component: {fileID: 400}
  - component: {fileID: 1100}
  m_Layer: 0
  m_Name: Player
--- !u!4 &400
Transform:
  m_ObjectHideFlags: 0
  m_GameObject: {fileID: 100}
  m_LocalRotation: {x: 0, y: 0, z: 0, w: 1}
  m_Children:
  - {fileID: 401}
  m_Father: {fileID: 0}
--- !u!1 &101
GameObject:
  m_Component:
  - component: {fileID: 401}
  m_Name: Weapon
--- !u!4 &401
Transform:
  m_GameObject: {fileID: 101}
  m_Children: []
  m_Father: {fileID: 400}
--- !u!114 &1100
MonoBehaviour:
  m_ObjectHideFlags: 0
  m_GameObject: {fileID: 100}
  m_Enabled: 1
  m_Script: {fileID: 11500000, guid: aaa111aaa111aaa111aaa111aaa111aa, type: 3}
  m_Name:
  m_EditorClassIdentifier:
  speed: 5
"""

PLAYER_SCRIPT = """using UnityEngine;

public class Player : MonoBehaviour
{
    public float speed;
    [SerializeField] private float power;
}
"""

UNUSED_SCRIPT = """using UnityEngine;

public class Legacy : MonoBehaviour
{
    public int count;
}
"""

META_TEMPLATE = """fileFormatVersion: 2
guid: {guid}
MonoImporter:
  externalObjects: {{}}
"""
